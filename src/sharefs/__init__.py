"""sharefs: a capability-gated remote document store as a filesystem.

Path resolution, permission checks and uniform metadata over a remote
folder tree whose items carry their own permission flags.
"""

__version__ = "0.1.0"

from sharefs.fs import (
    AdapterConfig,
    Capability,
    CapabilityNotSupportedError,
    ItemKind,
    ItemNotFoundError,
    RemoteClient,
    RemoteItem,
    ShareFileAdapter,
    ShareFSError,
    StorageError,
    UniformMetadata,
)
from sharefs.store import StoreClient

__all__ = [
    "AdapterConfig",
    "Capability",
    "CapabilityNotSupportedError",
    "ItemKind",
    "ItemNotFoundError",
    "RemoteClient",
    "RemoteItem",
    "ShareFSError",
    "ShareFileAdapter",
    "StorageError",
    "StoreClient",
    "UniformMetadata",
    "__version__",
]
