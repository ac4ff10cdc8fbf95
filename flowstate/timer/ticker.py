"""Qt-backed tick source for the timer engine."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer

from .engine import TICK_INTERVAL_MS


class QtTickSource(QObject):
    """Repeating ``QTimer`` on the main event loop.

    ``stop()`` is final for the current run: a timeout already queued when
    the timer is stopped is dropped instead of reaching the callback.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    @property
    def interval(self) -> int:
        return self._qt_timer.interval()

    def start(self, callback: Callable[[], None]) -> None:
        if self._callback is not None:
            return
        self._callback = callback
        self._qt_timer.start()

    def stop(self) -> None:
        self._callback = None
        self._qt_timer.stop()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
