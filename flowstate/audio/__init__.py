"""Audio package."""

from .sounds import CompletionSound, generate_completion_chime

__all__ = ["CompletionSound", "generate_completion_chime"]
