"""Filesystem layer — path resolution, capability gates, metadata, adapter."""

from sharefs.fs.access import AccessGate
from sharefs.fs.adapter import ShareFileAdapter
from sharefs.fs.config import PERSONAL_FOLDERS, AdapterConfig
from sharefs.fs.exceptions import (
    CapabilityNotSupportedError,
    ItemNotFoundError,
    ShareFSError,
    StorageError,
)
from sharefs.fs.listing import RecursiveLister
from sharefs.fs.metadata import DIRECTORY_MIME_TYPE, MetadataNormalizer
from sharefs.fs.permissions import Capability
from sharefs.fs.protocol import MimeGuesser, RemoteClient, StreamOpener
from sharefs.fs.resolver import PathResolver
from sharefs.fs.streams import open_url_stream
from sharefs.fs.types import ItemKind, RemoteItem, UniformMetadata
from sharefs.fs.utils import guess_mime_type

__all__ = [
    "DIRECTORY_MIME_TYPE",
    "PERSONAL_FOLDERS",
    "AccessGate",
    "AdapterConfig",
    "Capability",
    "CapabilityNotSupportedError",
    "ItemKind",
    "ItemNotFoundError",
    "MetadataNormalizer",
    "MimeGuesser",
    "PathResolver",
    "RecursiveLister",
    "RemoteClient",
    "RemoteItem",
    "ShareFSError",
    "ShareFileAdapter",
    "StorageError",
    "StreamOpener",
    "UniformMetadata",
    "guess_mime_type",
    "open_url_stream",
]
