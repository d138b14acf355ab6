"""Persistence-specific exceptions."""


class PersistenceError(Exception):
    """Base exception for all persistence errors."""


class SnapshotCorruptError(PersistenceError):
    """Raised when a stored snapshot cannot be decoded into entities."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Snapshot {key!r} is corrupt: {reason}")


class PersistenceDegraded(PersistenceError):
    """A snapshot read or write failed; the in-memory state stays authoritative.

    Stores never raise this. They record it as a warning on their status so
    callers can surface it without treating the operation as failed.
    """

    code = "PERSISTENCE_DEGRADED"

    def __init__(self, key: str, operation: str, cause: BaseException):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} of {key!r} failed: {cause}")
