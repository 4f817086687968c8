"""Rule-based interpretation of free-text commands."""

from .command import detect_intent, extract_location_phrase, interpret

__all__ = ["detect_intent", "extract_location_phrase", "interpret"]
