"""Shared test helpers for FlowState."""

from typing import Callable, Optional

from flowstate.timer.engine import TimerEngine


class ManualTickSource:
    """Tick source advanced by ``advance()`` instead of the wall clock."""

    def __init__(self):
        self._callback: Optional[Callable[[], None]] = None
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback):
        self.start_calls += 1
        self._callback = callback

    def stop(self):
        self.stop_calls += 1
        self._callback = None

    def advance(self, seconds: int = 1) -> None:
        """Fire ``seconds`` ticks, stopping early once cancelled."""
        for _ in range(seconds):
            if self._callback is None:
                return
            self._callback()


class SignalCollector:
    """Utility to capture listener calls / pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_to_zero(engine: TimerEngine) -> None:
    """Jump to the last second and tick once so the clock reads 00:00."""
    engine._remaining = 1
    engine.tick()
