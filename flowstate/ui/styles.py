"""QSS stylesheet and colours for the FlowState popover."""

from __future__ import annotations


PALETTE: dict[str, str] = {
    "bg":           "#1E1E2A",
    "bg_secondary": "#2A2A3A",
    "accent":       "#F5A97F",
    "text":         "#E6E6F0",
    "text_muted":   "#80809A",
    "border":       "#3A3A50",
}

MONO_FONTS = ("SF Mono", "Menlo", "DejaVu Sans Mono", "monospace")


def countdown_color(is_running: bool, palette: dict[str, str] = PALETTE) -> str:
    """Primary text while counting down, muted otherwise."""
    return palette["text"] if is_running else palette["text_muted"]


def build_stylesheet(palette: dict[str, str] = PALETTE) -> str:
    p = palette
    mono = ", ".join(f'"{f}"' for f in MONO_FONTS)
    return f"""
    /* ── panel ──────────────────────────────────── */
    QWidget#popover {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 13px;
    }}

    QLabel#headline {{
        font-size: 15px;
        font-weight: 700;
    }}

    QLabel#countdown {{
        font-family: {mono};
        font-size: 60px;
        font-weight: 700;
    }}

    /* ── task entry ─────────────────────────────── */
    QLineEdit {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 6px 8px;
    }}

    QLineEdit:focus {{
        border-color: {p['accent']};
    }}

    /* ── controls ───────────────────────────────── */
    QPushButton#iconButton {{
        background-color: transparent;
        color: {p['text']};
        border: none;
        font-size: 24px;
        padding: 4px 12px;
    }}

    QPushButton#iconButton:hover {{
        color: {p['accent']};
    }}

    QPushButton#iconButton:disabled {{
        color: {p['border']};
    }}

    QPushButton#quitButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: none;
        padding: 4px;
    }}

    QPushButton#quitButton:hover {{
        color: {p['text']};
    }}

    QFrame#divider {{
        background-color: {p['border']};
        max-height: 1px;
    }}
    """
