"""FlowState: a menu-bar Pomodoro countdown timer."""

__version__ = "0.1.0"
