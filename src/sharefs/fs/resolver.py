"""PathResolver — logical path to remote item."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import ItemNotFoundError, ShareFSError, StorageError
from .utils import apply_prefix, normalize_path

if TYPE_CHECKING:
    from .protocol import RemoteClient
    from .types import RemoteItem

logger = logging.getLogger(__name__)


class PathResolver:
    """Translates logical paths into remote items.

    Only files and folders resolve.  A missing path, or a node of any other
    kind, yields ``None``; lookup failures are raised as ``StorageError``.
    """

    def __init__(self, client: RemoteClient, prefix: str = "") -> None:
        self._client = client
        self._prefix = prefix

    def remote_path(self, path: str) -> str:
        """The prefixed, slash-normalized path handed to the remote client."""
        if path == ".":
            path = ""
        return normalize_path(apply_prefix(self._prefix, path))

    def resolve(self, path: str) -> RemoteItem | None:
        remote_path = self.remote_path(path)
        try:
            item = self._client.get_item_by_path(remote_path)
        except ItemNotFoundError:
            logger.debug("No remote item at %s", remote_path)
            return None
        except ShareFSError:
            raise
        except Exception as e:
            raise StorageError(f"Lookup failed for {remote_path}: {e}") from e

        if item is None or item.kind is None:
            logger.debug("Unresolvable item at %s", remote_path)
            return None
        return item
