"""
Error taxonomy shared by the repositories.

ValidationError and NotFoundError reach the caller; StorageError is raised by
the store adapters and swallowed at repository boundaries.
"""


class ProtouchError(Exception):
    """Base class for all Protouch errors."""


class ValidationError(ProtouchError, ValueError):
    """Bad input: empty title, unknown interval, unknown tip id, bad preference."""


class NotFoundError(ProtouchError, LookupError):
    """Operation addressed an id that does not exist."""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} not found: {item_id}")


class StorageError(ProtouchError):
    """Key-value store read/write failure (I/O error, corruption)."""
