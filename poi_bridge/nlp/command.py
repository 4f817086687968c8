"""Intent detection and location extraction for POI commands.

Commands are short English sentences typed by a user or generated by
the map frontend when a point is clicked:

Example
-------
    >>> interpret("Find charging stations in Berlin")
    (<Intent.SEARCH_POI: 2>, 'Berlin')
    >>> interpret("Search coordinates 48.8566, 2.3522")
    (<Intent.SEARCH_POI: 2>, 'coordinates 48.8566, 2.3522')
    >>> interpret("list tools")
    (<Intent.LIST_TOOLS: 1>, '')
"""

import re
from typing import Tuple

from ..domain.models import Intent

# Checked in order: a command mentioning both POI and tool keywords is a search.
SEARCH_KEYWORDS = ("charging", "stations", "poi", "coordinates")
TOOLS_KEYWORDS = ("tools",)

_LOCATION_RE = re.compile(r"\b(?:in|near|at|for)\s+([^\n]+)", re.IGNORECASE)
COORDINATES_RE = re.compile(
    r"coordinates\s+([-+]?\d+(?:\.\d+)?)\s*,\s*([-+]?\d+(?:\.\d+)?)",
    re.IGNORECASE,
)


def detect_intent(command: str) -> Intent:
    """Classify a command by keyword presence.

    Parameters
    ----------
    command : str
        The raw command text.

    Returns
    -------
    Intent
        SEARCH_POI if any search keyword appears, else LIST_TOOLS if a
        tools keyword appears, else UNRECOGNIZED.
    """
    text = command.lower()
    if any(keyword in text for keyword in SEARCH_KEYWORDS):
        return Intent.SEARCH_POI
    if any(keyword in text for keyword in TOOLS_KEYWORDS):
        return Intent.LIST_TOOLS
    return Intent.UNRECOGNIZED


def extract_location_phrase(command: str) -> str:
    """Extract the location a search command refers to.

    Tried in order: the text after "in", "near", "at" or "for"; a
    ``coordinates <lat>, <lon>`` span; the last word of a multi-word
    command. Returns an empty string when none applies.
    """
    match = _LOCATION_RE.search(command)
    if match:
        phrase = match.group(1).strip()
        if phrase:
            return phrase

    coords = COORDINATES_RE.search(command)
    if coords:
        return coords.group(0).strip()

    words = command.split()
    if len(words) > 1:
        return words[-1]
    return ""


def interpret(command: str) -> Tuple[Intent, str]:
    """Classify a command and extract its location phrase.

    The location phrase is only extracted for POI searches; other
    intents always come back with an empty phrase.
    """
    intent = detect_intent(command)
    if intent is not Intent.SEARCH_POI:
        return intent, ""
    return intent, extract_location_phrase(command)
