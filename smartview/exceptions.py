"""Exceptions raised by smartview.

Decoding itself never raises: short or malformed buffers only shrink the
resulting block tree. These exceptions report misuse of the surrounding API,
such as asking for a parser that was never registered.
"""


class SmartViewError(Exception):
    """Base exception for all smartview errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnknownParserError(SmartViewError):
    """Raised when a parser name is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown parser: {name}", {"name": name})
        self.name = name


class DuplicateParserError(SmartViewError):
    """Raised when a parser name or tag is registered twice."""

    def __init__(self, key, existing: str):
        label = f"0x{key:08X}" if isinstance(key, int) else str(key)
        super().__init__(
            f"{label} is already registered to {existing}",
            {"key": key, "existing": existing},
        )
        self.key = key
        self.existing = existing
