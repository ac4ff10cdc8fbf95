"""Menu-bar application shell for FlowState.

Wires one ``TimerEngine`` to its two presentation surfaces (the tray
status indicator and the popover panel) and to the completion notifier.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QApplication

from .audio.sounds import CompletionSound
from .notifications import CompletionNotifier
from .settings import Settings
from .timer.engine import TimerEngine
from .ui.bridge import EngineSignals
from .ui.popover import PopoverPanel
from .ui.status_item import StatusIndicator


logger = logging.getLogger(__name__)


class FlowStateApp(QObject):
    """Owns the UI objects; the engine is passed in by the caller."""

    def __init__(
        self,
        engine: TimerEngine,
        settings: Settings,
        *,
        sounds: CompletionSound | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._settings = settings

        # ── engine → Qt ───────────────────────────────────────────────
        self._signals = EngineSignals(engine, self)

        # ── surfaces ──────────────────────────────────────────────────
        self._popover = PopoverPanel(self._signals)
        self._status = StatusIndicator(self._signals, self)

        # ── completion delivery ───────────────────────────────────────
        if sounds is not None:
            sounds.set_enabled(settings.sound_enabled)
            sounds.set_volume(settings.sound_volume)
        self._notifier = CompletionNotifier(self._status, settings, sounds, self)

        # ── wire signals ──────────────────────────────────────────────
        self._signals.completed.connect(self._notifier.notify)
        self._status.popover_requested.connect(self.toggle_popover)
        self._status.quit_requested.connect(self.quit)
        self._popover.quit_requested.connect(self.quit)

    # ── accessors ─────────────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def popover(self) -> PopoverPanel:
        return self._popover

    @property
    def status_indicator(self) -> StatusIndicator:
        return self._status

    @property
    def notifier(self) -> CompletionNotifier:
        return self._notifier

    # ── lifecycle ─────────────────────────────────────────────────────────

    def show(self) -> None:
        self._status.show()
        if not StatusIndicator.isSystemTrayAvailable():
            logger.warning("No system tray available; opening the panel instead")
            self._popover.show()

    def toggle_popover(self) -> None:
        self._popover.toggle_at(self._status.geometry())

    def quit(self) -> None:
        logger.info("Quitting FlowState")
        self._engine.pause()
        self._signals.disconnect_engine()
        self._popover.hide()
        self._status.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()
