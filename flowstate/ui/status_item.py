"""Menu-bar status indicator.

Shows the remaining time beside a static timer glyph while the countdown
runs; shows the glyph alone otherwise.  Qt tray icons have no title, so
the text is painted into the icon image itself.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, Qt, QRectF, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QFontMetrics, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QMenu, QSystemTrayIcon

from ..timer.engine import TimerEngine
from .bridge import EngineSignals


ICON_HEIGHT = 44       # drawn at 2× for Retina
GLYPH_SIZE = 44
TEXT_GAP = 6
APP_TOOLTIP = "FlowState"


def status_title(is_running: bool, display_text: str) -> str:
    """Text for the menu-bar item: the countdown while running, else blank."""
    return display_text if is_running else ""


def _draw_glyph(p: QPainter, x: int, colour: QColor) -> None:
    """Stopwatch outline: ring, crown and a single hand."""
    r = GLYPH_SIZE // 2 - 6
    cx, cy = x + GLYPH_SIZE // 2, ICON_HEIGHT // 2 + 3
    p.setPen(QPen(colour, 4))
    p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    p.drawLine(cx, cy, cx, cy - r + 6)
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(colour)
    p.drawRoundedRect(cx - 5, cy - r - 8, 10, 5, 2, 2)


def make_status_icon(title: str) -> QIcon:
    """Paint *title* (may be empty) left of the timer glyph."""
    font = QFont("Menlo")
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setPixelSize(30)
    font.setWeight(QFont.Weight.DemiBold)
    text_w = QFontMetrics(font).horizontalAdvance(title) + TEXT_GAP if title else 0

    img = QImage(text_w + GLYPH_SIZE, ICON_HEIGHT, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)  # template image: macOS tints automatically

    if title:
        p.setFont(font)
        p.setPen(colour)
        p.drawText(
            QRectF(0, 0, text_w - TEXT_GAP, ICON_HEIGHT),
            Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignRight,
            title,
        )
    _draw_glyph(p, text_w, colour)
    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class StatusIndicator(QSystemTrayIcon):
    """Tray icon bound to the engine's ``(is_running, display_text)`` stream.

    Left click emits ``popover_requested``; the context menu mirrors the
    popover's controls.
    """

    popover_requested = pyqtSignal()
    quit_requested = pyqtSignal()

    def __init__(self, signals: EngineSignals, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._engine: TimerEngine = signals.engine
        self._title: str | None = None
        self._build_menu()
        self.activated.connect(self._on_activated)
        signals.state_changed.connect(self.render)
        self.render(self._engine.is_running, self._engine.display_text)

    @property
    def title(self) -> str:
        return self._title or ""

    def render(self, is_running: bool, display_text: str) -> None:
        title = status_title(is_running, display_text)
        self._start_action.setText("Pause" if is_running else "Start")
        self._reset_action.setEnabled(not is_running)
        if title == self._title:
            return
        self._title = title
        self.setIcon(make_status_icon(title))
        self.setToolTip(f"{APP_TOOLTIP}: {title}" if title else APP_TOOLTIP)

    # ── menu ──────────────────────────────────────────────────────────────

    def _build_menu(self) -> None:
        """Create the right-click context menu for the tray icon."""
        menu = QMenu()
        self._start_action = menu.addAction("Start")
        self._start_action.triggered.connect(self._toggle_start)
        self._reset_action = menu.addAction("Reset")
        self._reset_action.triggered.connect(self._engine.reset)
        menu.addSeparator()
        quit_action = menu.addAction("Quit FlowState")
        quit_action.triggered.connect(self.quit_requested)
        self._menu = menu
        self.setContextMenu(menu)

    def _toggle_start(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Left-click on tray icon → toggle the popover."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.popover_requested.emit()
