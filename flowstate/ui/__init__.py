"""UI package."""

from .bridge import EngineSignals
from .popover import PopoverPanel
from .status_item import StatusIndicator, make_status_icon, status_title

__all__ = [
    "EngineSignals",
    "PopoverPanel",
    "StatusIndicator",
    "make_status_icon",
    "status_title",
]
