"""Domain errors raised by services and adapters."""


class ScribeError(Exception):
    """Base class for errors the CLI reports to the user."""


class EntryNotFoundError(ScribeError, LookupError):
    """No vocabulary entry matches the requested id or term."""

    def __init__(self, key: str):
        super().__init__(f"No vocabulary entry matches '{key}'")
        self.key = key


class StoreFormatError(ScribeError, ValueError):
    """A JSON store exists but its content cannot be read."""
