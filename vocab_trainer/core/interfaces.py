"""
Collaborator contracts consumed by the application service
"""

import logging
from typing import Any, Protocol

from .database.models import AppState

logger = logging.getLogger(__name__)


class Persistence(Protocol):
    """Loads and saves the whole application state; never raises"""

    def load(self) -> AppState: ...

    def save(self, state: AppState) -> Any: ...


class AudioPlayer(Protocol):
    """Best-effort pronunciation; may be sync or return an awaitable"""

    def play(self, word: str, forms: list[str] | None, region: str) -> Any: ...


class Notifier(Protocol):
    """Fire-and-forget user notifications"""

    def notify(self, message: str, severity: str = "info") -> None: ...


class LoggingNotifier:
    """Notifier that writes notifications to the log"""

    _LEVELS = {
        "success": logging.INFO,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(self):
        self.logger = logging.getLogger("vocab_trainer.notifications")

    def notify(self, message: str, severity: str = "info") -> None:
        self.logger.log(self._LEVELS.get(severity, logging.INFO), f"[{severity}] {message}")


class SilentAudioPlayer:
    """Audio player that plays nothing"""

    def play(self, word: str, forms: list[str] | None, region: str) -> None:
        logger.debug(f"Audio disabled, skipping '{word}' ({region})")
