"""Qt signal bridge over the toolkit-free timer engine."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..timer.engine import CompletionEvent, TimerEngine


class EngineSignals(QObject):
    """Re-emits engine listener callbacks as ``pyqtSignal``s.

    Signals
    -------
    state_changed(is_running: bool, display_text: str)
    task_name_changed(task_name: str)
    completed(event: CompletionEvent)
    """

    state_changed = pyqtSignal(bool, str)
    task_name_changed = pyqtSignal(str)
    completed = pyqtSignal(object)

    def __init__(self, engine: TimerEngine, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._unsubscribers: list[Callable[[], None]] = [
            engine.add_state_listener(self.state_changed.emit),
            engine.add_task_listener(self.task_name_changed.emit),
            engine.add_completion_listener(self._on_completed),
        ]

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    def disconnect_engine(self) -> None:
        """Stop relaying engine callbacks (used on shutdown)."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _on_completed(self, event: CompletionEvent) -> None:
        self.completed.emit(event)
