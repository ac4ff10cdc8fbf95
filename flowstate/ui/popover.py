"""Popover panel shown from the menu-bar icon.

Layout (top → bottom):
    - "FlowState" headline
    - Task name input
    - Large monospaced countdown (dimmed while not running)
    - Play/pause toggle + reset (reset disabled while running)
    - Divider
    - Quit
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QPoint, QRect, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QLineEdit, QFrame,
)

from ..timer.engine import TimerEngine
from .bridge import EngineSignals
from .styles import build_stylesheet, countdown_color


PLAY_GLYPH = "\u25b6"    # ▶
PAUSE_GLYPH = "\u23f8"   # ⏸
RESET_GLYPH = "\u21bb"   # ↻

PANEL_WIDTH = 280


class PopoverPanel(QWidget):
    """The primary panel: full timer state, always rendered."""

    quit_requested = pyqtSignal()

    def __init__(
        self,
        signals: EngineSignals,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent, Qt.WindowType.Popup)
        self.setObjectName("popover")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setFixedWidth(PANEL_WIDTH)
        self._signals = signals
        self._engine: TimerEngine = signals.engine
        self._build_ui()
        self._connect_signals()
        self.setStyleSheet(build_stylesheet())

        self._task_input.setText(self._engine.task_name)
        self._on_state_changed(self._engine.is_running, self._engine.display_text)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 12)
        layout.setSpacing(15)

        self._headline = QLabel("FlowState", self)
        self._headline.setObjectName("headline")
        self._headline.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._headline)

        self._task_input = QLineEdit(self)
        self._task_input.setPlaceholderText("Name your task...")
        layout.addWidget(self._task_input)

        self._countdown = QLabel(self._engine.display_text, self)
        self._countdown.setObjectName("countdown")
        self._countdown.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._countdown)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(20)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton(PLAY_GLYPH, self)
        self._start_pause_btn.setObjectName("iconButton")

        self._reset_btn = QPushButton(RESET_GLYPH, self)
        self._reset_btn.setObjectName("iconButton")
        self._reset_btn.setToolTip("Reset")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        divider = QFrame(self)
        divider.setObjectName("divider")
        divider.setFrameShape(QFrame.Shape.HLine)
        layout.addWidget(divider)

        self._quit_btn = QPushButton("Quit App", self)
        self._quit_btn.setObjectName("quitButton")
        layout.addWidget(self._quit_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._quit_btn.clicked.connect(self.quit_requested)
        self._task_input.textEdited.connect(self._engine.set_task_name)

        self._signals.state_changed.connect(self._on_state_changed)
        self._signals.task_name_changed.connect(self._on_task_name_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_state_changed(self, is_running: bool, display_text: str) -> None:
        self._countdown.setText(display_text)
        self._countdown.setStyleSheet(f"color: {countdown_color(is_running)};")

        self._start_pause_btn.setText(PAUSE_GLYPH if is_running else PLAY_GLYPH)
        self._start_pause_btn.setToolTip("Pause" if is_running else "Start")
        self._reset_btn.setEnabled(not is_running)

    def _on_task_name_changed(self, task_name: str) -> None:
        # Edits made in this field already match; only external changes land.
        if self._task_input.text() != task_name:
            self._task_input.setText(task_name)

    # ── placement ─────────────────────────────────────────────────────────

    def toggle_at(self, anchor: QRect) -> None:
        """Show below *anchor* (the tray icon geometry), or hide if shown."""
        if self.isVisible():
            self.hide()
            return
        self.adjustSize()
        if anchor.isValid():
            x = anchor.center().x() - self.width() // 2
            self.move(QPoint(max(0, x), anchor.bottom()))
        self.show()
        self.raise_()
        self.activateWindow()
        self._task_input.setFocus()
