"""Collaborator protocols — runtime-checkable interfaces.

``RemoteClient`` is the contract the adapter needs from whatever talks to
the remote store.  Signing requests, sessions, retries and the upload wire
protocol all live behind it.  ``sharefs.store.StoreClient`` is the
in-process implementation used for development and tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, BinaryIO, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .types import RemoteItem


@runtime_checkable
class RemoteClient(Protocol):
    """Core interface every remote client must implement.

    Lookups raise ``ItemNotFoundError`` when the path or id does not exist.
    Any other exception is treated as a transport or authentication failure.
    """

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_item_by_path(self, path: str) -> RemoteItem: ...

    def get_item_by_id(self, item_id: str, include_children: bool = False) -> RemoteItem: ...

    def get_home_folder_name(self) -> str: ...

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def get_item_contents(self, item_id: str) -> bytes: ...

    def get_download_url(self, item_id: str) -> str: ...

    def upload_file_streamed(
        self,
        stream: BinaryIO,
        parent_id: str,
        filename: str,
        unzip: bool = False,
        overwrite: bool = False,
    ) -> None: ...

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update_item(self, item_id: str, fields: Mapping[str, Any]) -> None:
        """Apply *fields* (``Name``, ``FileName``, ``Parent.Id``, ...) to an item."""
        ...

    def copy_item(self, target_parent_id: str, item_id: str, overwrite: bool = False) -> None: ...

    def delete_item(self, item_id: str) -> None: ...

    def create_folder(
        self,
        parent_id: str,
        name: str,
        description: str = "",
        overwrite: bool = False,
    ) -> None: ...


@runtime_checkable
class MimeGuesser(Protocol):
    """Guess a MIME type from a filename and an optional content sample."""

    def __call__(self, filename: str, content: bytes | str | None = None) -> str: ...


@runtime_checkable
class StreamOpener(Protocol):
    """Open a readable binary stream for a download URL."""

    def __call__(self, url: str) -> BinaryIO: ...
