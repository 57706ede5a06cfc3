"""
Tests for the default collaborators
"""

import logging

from vocab_trainer.core.interfaces import LoggingNotifier, SilentAudioPlayer


class TestLoggingNotifier:
    """Test LoggingNotifier class"""

    def test_severity_maps_to_log_level(self, caplog):
        notifier = LoggingNotifier()

        with caplog.at_level(logging.INFO, logger="vocab_trainer.notifications"):
            notifier.notify("Слово добавлено", "success")
            notifier.notify("Заполните все поля!", "warning")
            notifier.notify("Ошибка", "error")

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.INFO, logging.WARNING, logging.ERROR]
        assert "[warning] Заполните все поля!" in caplog.text

    def test_unknown_severity(self, caplog):
        with caplog.at_level(logging.INFO, logger="vocab_trainer.notifications"):
            LoggingNotifier().notify("hello", "celebration")

        assert caplog.records[0].levelno == logging.INFO


class TestSilentAudioPlayer:
    """Test SilentAudioPlayer class"""

    def test_play_returns_nothing(self):
        assert SilentAudioPlayer().play("go", ["go", "went", "gone"], "uk") is None
