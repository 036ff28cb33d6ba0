"""Custom exception hierarchy for the sharefs filesystem layer."""


class ShareFSError(Exception):
    """Base exception for all sharefs errors."""


class ItemNotFoundError(ShareFSError):
    """Raised by a remote client when a path or id has no corresponding item."""


class StorageError(ShareFSError):
    """Raised on remote failures (transport, authentication, database, etc.)."""


class CapabilityNotSupportedError(ShareFSError):
    """Raised when the adapter doesn't support a requested operation."""
