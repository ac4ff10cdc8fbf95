"""Completion notifications: tray balloon plus chime.

Delivery is best effort.  Anything that goes wrong here is logged and
dropped; the timer never hears about it.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QSystemTrayIcon

from .audio.sounds import CompletionSound
from .settings import Settings
from .timer.engine import CompletionEvent


logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT_MS = 10_000


class CompletionNotifier(QObject):
    """Announces finished countdowns through the tray icon."""

    def __init__(
        self,
        tray_icon: QSystemTrayIcon,
        settings: Settings,
        sounds: CompletionSound | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._tray_icon = tray_icon
        self._settings = settings
        self._sounds = sounds

    def notify(self, event: CompletionEvent) -> None:
        self._play_sound()
        self._show_message(event)

    # ── internal ──────────────────────────────────────────────────────────

    def _play_sound(self) -> None:
        if self._sounds is None or not self._settings.sound_enabled:
            return
        try:
            self._sounds.play()
        except Exception:
            logger.exception("Completion sound failed")

    def _show_message(self, event: CompletionEvent) -> None:
        if not self._settings.notifications_enabled:
            logger.info("Notifications disabled, skipping: %s", event.message)
            return
        if not self._tray_icon.supportsMessages():
            logger.warning("System tray cannot show messages: %s", event.message)
            return
        try:
            self._tray_icon.showMessage(
                event.title,
                event.message,
                QSystemTrayIcon.MessageIcon.Information,
                MESSAGE_TIMEOUT_MS,
            )
        except Exception:
            logger.exception("Could not deliver completion notification")
