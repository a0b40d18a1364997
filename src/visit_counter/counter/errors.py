"""Store failure types.

These are carried inside ``StoreResult`` rather than raised to callers.
The service decides what a failed result turns into.
"""


class StoreError(Exception):
    """Base exception for all visit store failures."""

    def __init__(self, message: str, operation: str = ""):
        self.operation = operation
        super().__init__(message)


class StoreUnavailable(StoreError):
    """The store could not be opened, read or written (includes lock timeouts)."""

    pass


class InvalidKey(StoreError):
    """A date key or year-month prefix was not in canonical form."""

    def __init__(self, key: str, operation: str = ""):
        self.key = key
        super().__init__(f"malformed key {key!r}", operation)
