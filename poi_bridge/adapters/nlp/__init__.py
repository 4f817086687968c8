"""NLP adapters - Implementations of CommandInterpreterPort.

Available implementations:
- RuleBasedCommandInterpreter: keyword intents and regex location extraction
"""

from .rule_based import RuleBasedCommandInterpreter

__all__ = ["RuleBasedCommandInterpreter"]
