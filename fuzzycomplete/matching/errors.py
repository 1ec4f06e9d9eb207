"""Exceptions raised by the matching engine and its surfaces."""


class FuzzyCompleteError(Exception):
    """Base class for all fuzzycomplete errors."""


class InvalidOptionError(FuzzyCompleteError, ValueError):
    """A search option is out of range or of the wrong type.

    Raised when options are built, never in the middle of a search.
    """

    def __init__(self, option: str, value, reason: str) -> None:
        super().__init__(f"Invalid value for '{option}': {value!r} ({reason})")
        self.option = option
        self.value = value
        self.reason = reason


class ConfigFileError(FuzzyCompleteError):
    """A config or item file could not be read or parsed."""
