"""SoundType turns text into short melodies."""

from .engine import DEFAULT_FILENAME, SoundTypeEngine

__all__ = ["DEFAULT_FILENAME", "SoundTypeEngine"]
