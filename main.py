#!/usr/bin/env python3
"""
Vocabulary Trainer
Console application entry point
"""

import asyncio
import logging

from vocab_trainer.app import VocabularyApp
from vocab_trainer.config import get_settings
from vocab_trainer.database import init_db
from vocab_trainer.utils import format_progress_stats
from vocab_trainer.word_bank import WordBank

HELP = """Команды:
  add <LEVEL>        добавить все слова уровня
  remove <LEVEL>     удалить все слова уровня
  word <en> = <ru>   добавить своё слово (уровень CUSTOM)
  cards              повторение карточками
  quiz               повторение тестом
  list               список слов к повторению
  learned <word>     отметить слово выученным / вернуть в изучение
  practice <mode>    scheduled | endless
  stats              прогресс
  reset              сбросить все данные
  quit               выход"""


async def ask(prompt: str) -> str:
    return (await asyncio.to_thread(input, prompt)).strip()


async def review_cards(app: VocabularyApp) -> None:
    while True:
        card = app.current_flashcard()
        if card is None:
            print("Нет слов для повторения")
            return
        print(f"\n[{card.position}/{card.total}] {card.display}")
        if await ask("Enter - показать перевод, q - выход: ") == "q":
            return
        print(f"  {card.translation}")
        answer = await ask("Знаю? (y/n): ")
        outcome = app.answer_flashcard(answer.lower().startswith("y"))
        if outcome is None or outcome.round_complete:
            return


async def review_quiz(app: VocabularyApp) -> None:
    while True:
        view = app.current_quiz()
        if view is None:
            print("Нет слов для повторения")
            return
        print(f"\n[{view.position}/{view.total}] {view.question.prompt}")
        for number, option in enumerate(view.options, 1):
            print(f"  {number}. {option}")
        choice = await ask("Номер ответа (q - выход): ")
        if choice == "q":
            return
        if not choice.isdigit() or not 1 <= int(choice) <= len(view.options):
            print("Неверный номер")
            continue
        outcome = app.answer_quiz(view, view.options[int(choice) - 1])
        print("✅ Верно!" if outcome.correct else f"❌ Правильный ответ: {outcome.correct_answer}")
        if outcome.round_complete:
            return


async def run(app: VocabularyApp) -> None:
    print(HELP)
    while True:
        line = await ask("\n> ")
        command, _, argument = line.partition(" ")
        argument = argument.strip()

        if command in ("quit", "exit", "q"):
            return
        elif command == "add" and argument:
            app.add_all_level_words(argument.upper())
        elif command == "remove" and argument:
            app.remove_all_level_words(argument.upper())
        elif command == "word":
            headword, _, translation = argument.partition("=")
            app.add_single_word(headword, translation, "CUSTOM")
        elif command == "cards":
            app.set_mode("flashcards")
            await review_cards(app)
        elif command == "quiz":
            app.set_mode("quiz")
            await review_quiz(app)
        elif command == "list":
            for item in app.words_list():
                print(f"  {item.headword} - {item.translation} ({item.level})")
        elif command == "learned" and argument:
            app.toggle_word_learned(argument)
        elif command == "practice" and argument:
            try:
                app.set_practice_mode(argument)
            except ValueError as e:
                print(e)
        elif command == "stats":
            print(format_progress_stats(app.progress_summary().to_dict()))
        elif command == "reset":
            if (await ask("Сбросить все данные? (yes/no): ")) == "yes":
                app.reset_data()
        else:
            print(HELP)


async def main():
    """Main application entry point"""
    # Load configuration
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger(__name__)
    logger.info("Starting Vocabulary Trainer...")

    db_manager = init_db(settings.database_url)
    word_bank = WordBank.from_json(settings.word_bank_path)
    app = VocabularyApp(db_manager, word_bank, settings=settings)

    try:
        await run(app)
        logger.info("Trainer stopped gracefully")
    except (KeyboardInterrupt, EOFError):
        logger.info("Shutdown requested, stopping trainer...")
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        raise
    finally:
        db_manager.close()


if __name__ == "__main__":
    asyncio.run(main())
