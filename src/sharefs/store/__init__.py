"""Reference remote store — a RemoteClient kept in SQL tables."""

from sharefs.store.client import (
    DOWNLOAD_URL_PREFIX,
    FILE_CAPABILITIES,
    FOLDER_CAPABILITIES,
    StoreClient,
)
from sharefs.store.models import StoreItem, StoreItemBase

__all__ = [
    "DOWNLOAD_URL_PREFIX",
    "FILE_CAPABILITIES",
    "FOLDER_CAPABILITIES",
    "StoreClient",
    "StoreItem",
    "StoreItemBase",
]
