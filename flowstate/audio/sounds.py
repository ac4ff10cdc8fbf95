"""Completion sound synthesis and playback using numpy + QSoundEffect.

The chime is generated programmatically as a WAV file (sine partials
shaped by an ADSR envelope) and cached to disk, so later launches only
load it.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect


logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FlowState"
CHIME_PATH = APP_SUPPORT_DIR / "sounds" / "session_complete.wav"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit mono PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_completion_chime() -> bytes:
    """Two-note bell (E5 → B5) with a soft octave overtone on the tail."""
    first = _sine(659.25, 0.18) * 0.5
    first = first * _make_envelope(
        len(first), attack=80, decay=300, sustain_level=0.4, release=600,
    )
    gap = np.zeros(int(SAMPLE_RATE * 0.04))

    tail_dur = 0.7
    second = _sine(987.77, tail_dur) * 0.45 + _sine(1975.53, tail_dur) * 0.06
    second = second * _make_envelope(
        len(second),
        attack=100,
        decay=int(SAMPLE_RATE * 0.2),
        sustain_level=0.3,
        release=int(SAMPLE_RATE * 0.4),
    )
    return _to_wav_bytes(np.concatenate([first, gap, second]))


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYBACK
# ═══════════════════════════════════════════════════════════════════════════


class CompletionSound(QObject):
    """The end-of-countdown chime, written once to disk and played on demand."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        cache_path: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._effect: QSoundEffect | None = None

        path = cache_path or CHIME_PATH
        try:
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(generate_completion_chime())
        except OSError:
            logger.warning("Could not write completion chime to %s", path)
            return

        self._effect = QSoundEffect(self)
        self._effect.setSource(QUrl.fromLocalFile(str(path)))
        self._effect.setVolume(self._volume)

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_loaded(self) -> bool:
        return self._effect is not None

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        if self._effect is not None:
            self._effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self) -> None:
        """No-op when disabled or when the chime could not be cached."""
        if self._enabled and self._effect is not None:
            self._effect.play()
