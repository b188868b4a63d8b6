"""Decode limits and the per-call decode context."""

from dataclasses import dataclass

# Largest list a parser agrees to walk. Lists claiming more are refused.
MAX_ENTRIES_SMALL = 500

# Cap on elements in a multi-valued property.
MAX_ENTRIES_LARGE = 1000

# Cap on any single counted byte run (strings, binaries).
MAX_BYTES = 0xFFFF


@dataclass(frozen=True)
class ParseContext:
    """Context handed to every decoder alongside the buffer.

    Attributes:
        max_entries: Upper bound on entries in a repeated list.
        named_properties: Entries come from a named-property list.
        rule_condition: Entries come from a rule condition.
    """
    max_entries: int = MAX_ENTRIES_SMALL
    named_properties: bool = False
    rule_condition: bool = False


DEFAULT_CONTEXT = ParseContext()
