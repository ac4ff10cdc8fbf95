"""Allow running FlowState as a module: python -m flowstate."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import FlowStateApp
from .audio.sounds import CompletionSound
from .settings import load_settings
from .timer.engine import TimerEngine
from .timer.ticker import QtTickSource


def configure_logging(level: str) -> int:
    """Set up root logging at *level*; unknown names fall back to INFO."""
    resolved = getattr(logging, str(level).upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(resolved)
    return resolved


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("FlowState")
    app.setOrganizationName("FlowState")
    app.setQuitOnLastWindowClosed(False)

    # One engine for the whole process, handed to every consumer.
    engine = TimerEngine(QtTickSource(app))
    window = FlowStateApp(engine, settings, sounds=CompletionSound(app), parent=app)
    window.show()
    logging.getLogger(__name__).info("FlowState ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
