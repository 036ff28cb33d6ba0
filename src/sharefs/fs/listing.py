"""RecursiveLister — folder children to metadata records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .utils import join_path

if TYPE_CHECKING:
    from .metadata import MetadataNormalizer
    from .protocol import RemoteClient
    from .types import RemoteItem, UniformMetadata


class RecursiveLister:
    """Walks a folder's children, optionally descending into subfolders.

    Entries come out depth-first: each child, then (when recursive) that
    child's descendants, in the order the remote returns children.
    """

    def __init__(self, client: RemoteClient, normalizer: MetadataNormalizer) -> None:
        self._client = client
        self._normalizer = normalizer

    def list_folder(
        self, folder: RemoteItem, base_path: str, recursive: bool = False
    ) -> list[UniformMetadata]:
        if folder.is_file:
            return []

        fetched = self._client.get_item_by_id(folder.id, include_children=True)
        children = [
            child for child in fetched.children or [] if child.is_file or child.is_folder
        ]

        entries: list[UniformMetadata] = []
        for child in children:
            entries.append(self._normalizer.normalize(child, base_path))
            if recursive and child.is_folder:
                child_path = join_path(base_path, child.name)
                entries.extend(self.list_folder(child, child_path, recursive=True))
        return entries
