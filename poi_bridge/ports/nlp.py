"""NLP port - Command interpretation.

Turns a raw command string into an intent and the location phrase
the command refers to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple

if TYPE_CHECKING:
    from ..domain.models import Intent


class CommandInterpreterPort(Protocol):
    """Port for command interpretation.

    Implementation: adapters/nlp/rule_based.py
    """

    def interpret(self, command: str) -> Tuple[Intent, str]:
        """Classify a command and extract its location phrase.

        Args:
            command: The raw command text.

        Returns:
            Tuple of (intent, location phrase). The phrase is empty when
            the command names no location or is not a POI search.
        """
        ...
