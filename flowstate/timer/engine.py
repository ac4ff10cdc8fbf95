"""Countdown state machine for FlowState.

States
------
IDLE/PAUSED   Not running; ``remaining`` frozen (25:00 after a reset).
RUNNING       Tick source active, one decrement per second.
COMPLETED     Transient: the tick after ``remaining`` hit 0.  Pauses,
              announces the completion, then rewinds to the full duration.

Transitions
-----------
IDLE/PAUSED → RUNNING          (start)
RUNNING → IDLE/PAUSED          (pause)
Any → IDLE/PAUSED @ 25:00      (reset)
RUNNING → COMPLETED → IDLE     (tick at 00:00)

The engine knows nothing about Qt widgets.  Consumers register plain
callables; the tick source is injected so tests can drive it by hand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol


logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATION = 25 * 60  # seconds
TICK_INTERVAL_MS = 1000
PLACEHOLDER_TASK = "Your task"
COMPLETION_TITLE = "Pomodoro Finished!"


# ── pure helpers ──────────────────────────────────────────────────────────


def format_time(seconds: int) -> str:
    """Zero-padded ``MM:SS`` for a number of seconds."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def completion_message(task_name: str) -> str:
    """Human-readable body for the completion notification."""
    name = task_name.strip()
    subject = f"'{name}'" if name else PLACEHOLDER_TASK
    return f"{subject} is complete. Time for a break!"


# ── value types ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the engine state handed to listeners."""

    task_name: str
    remaining: int
    is_running: bool

    @property
    def display_text(self) -> str:
        return format_time(self.remaining)


@dataclass(frozen=True)
class CompletionEvent:
    task_name: str
    message: str
    title: str = COMPLETION_TITLE


class TickSource(Protocol):
    """A cancellable periodic callback (one call per second)."""

    @property
    def is_active(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


StateListener = Callable[[bool, str], None]
TaskListener = Callable[[str], None]
CompletionListener = Callable[[CompletionEvent], None]


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Single 25-minute countdown with start / pause / reset.

    Listeners
    ---------
    state listener(is_running: bool, display_text: str)
        Called whenever either value changes.
    task listener(task_name: str)
        Called when the task name is edited.
    completion listener(event: CompletionEvent)
        Called once per finished countdown, while the display still
        reads ``00:00``.

    Every ``add_*_listener`` returns a zero-argument callable that removes
    the listener again.
    """

    def __init__(self, tick_source: TickSource) -> None:
        self._tick_source = tick_source

        # ── state ─────────────────────────────────────────────────────
        self._task_name: str = ""
        self._remaining: int = DEFAULT_DURATION
        self._is_running: bool = False

        # ── observers ─────────────────────────────────────────────────
        self._state_listeners: list[StateListener] = []
        self._task_listeners: list[TaskListener] = []
        self._completion_listeners: list[CompletionListener] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def display_text(self) -> str:
        return format_time(self._remaining)

    @property
    def task_name(self) -> str:
        return self._task_name

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            task_name=self._task_name,
            remaining=self._remaining,
            is_running=self._is_running,
        )

    # ══════════════════════════════════════════════════════════════════
    #  SUBSCRIPTIONS
    # ══════════════════════════════════════════════════════════════════

    def add_state_listener(self, listener: StateListener) -> Callable[[], None]:
        return self._subscribe(self._state_listeners, listener)

    def add_task_listener(self, listener: TaskListener) -> Callable[[], None]:
        return self._subscribe(self._task_listeners, listener)

    def add_completion_listener(
        self, listener: CompletionListener
    ) -> Callable[[], None]:
        return self._subscribe(self._completion_listeners, listener)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin (or resume) counting down.  No-op while running."""
        if self._is_running:
            return
        self._is_running = True
        self._tick_source.start(self.tick)
        logger.info("Timer started at %s", self.display_text)
        self._emit_state()

    def pause(self) -> None:
        """Stop counting down.  No-op when not running.

        Safe to call from inside a tick: the tick source is stopped before
        any listener runs.
        """
        if not self._is_running:
            return
        self._is_running = False
        self._tick_source.stop()
        logger.info("Timer paused at %s", self.display_text)
        self._emit_state()

    def reset(self) -> None:
        """Pause and rewind to the full duration."""
        self.pause()
        if self._remaining == DEFAULT_DURATION:
            return
        self._remaining = DEFAULT_DURATION
        logger.info("Timer reset to %s", self.display_text)
        self._emit_state()

    def set_task_name(self, text: str) -> None:
        if text == self._task_name:
            return
        self._task_name = text
        for listener in list(self._task_listeners):
            self._dispatch(listener, text)

    def tick(self) -> None:
        """One second elapsed.  Ignored unless running."""
        if not self._is_running:
            return
        if self._remaining > 0:
            self._remaining -= 1
            logger.debug("Tick: %s", self.display_text)
            self._emit_state()
            return
        self._complete()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _complete(self) -> None:
        self.pause()
        event = CompletionEvent(
            task_name=self._task_name,
            message=completion_message(self._task_name),
        )
        logger.info("Countdown complete: %s", event.message)
        for listener in list(self._completion_listeners):
            self._dispatch(listener, event)
        self._remaining = DEFAULT_DURATION
        self._emit_state()

    def _emit_state(self) -> None:
        is_running, text = self._is_running, self.display_text
        for listener in list(self._state_listeners):
            self._dispatch(listener, is_running, text)

    @staticmethod
    def _dispatch(listener: Callable[..., None], *args: object) -> None:
        try:
            listener(*args)
        except Exception:
            logger.exception("Timer listener %r failed", listener)

    @staticmethod
    def _subscribe(listeners: list, listener: Callable) -> Callable[[], None]:
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe
