"""Timer package."""

from .engine import (
    TimerEngine,
    TimerSnapshot,
    CompletionEvent,
    TickSource,
    DEFAULT_DURATION,
    TICK_INTERVAL_MS,
    PLACEHOLDER_TASK,
    COMPLETION_TITLE,
    format_time,
    completion_message,
)
from .ticker import QtTickSource

__all__ = [
    "TimerEngine",
    "TimerSnapshot",
    "CompletionEvent",
    "TickSource",
    "QtTickSource",
    "DEFAULT_DURATION",
    "TICK_INTERVAL_MS",
    "PLACEHOLDER_TASK",
    "COMPLETION_TITLE",
    "format_time",
    "completion_message",
]
