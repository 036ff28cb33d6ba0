"""ShareFileAdapter — filesystem operations over a capability-gated remote store."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, Literal

from .access import AccessGate
from .config import AdapterConfig
from .exceptions import CapabilityNotSupportedError
from .listing import RecursiveLister
from .metadata import MetadataNormalizer
from .permissions import Capability
from .resolver import PathResolver
from .streams import open_url_stream
from .utils import ascii_lower, basename, dirname

if TYPE_CHECKING:
    from typing import BinaryIO

    from .protocol import MimeGuesser, RemoteClient, StreamOpener
    from .types import RemoteItem, UniformMetadata

logger = logging.getLogger(__name__)


class ShareFileAdapter:
    """Presents a remote folder tree as a path-addressed filesystem.

    Every operation resolves its path(s) to remote items, checks the
    relevant capability flags, performs the remote call and returns
    normalized metadata.  A path that doesn't resolve and an operation the
    flags don't permit both return ``False``; failures raised by the remote
    client propagate.

    Usage::

        fs = ShareFileAdapter(client, prefix="Shared/Reports")
        fs.write("2024/q1.csv", b"region,total\\n")
        meta = fs.read("2024/q1.csv")
        meta.contents  # b"region,total\\n"
    """

    def __init__(
        self,
        client: RemoteClient,
        prefix: str = "",
        return_remote_item: bool = False,
        *,
        config: AdapterConfig | None = None,
        mime_guesser: MimeGuesser | None = None,
        stream_opener: StreamOpener | None = None,
    ) -> None:
        self._client = client
        self.config = config or AdapterConfig(prefix=prefix, return_remote_item=return_remote_item)
        self._open_stream = stream_opener or open_url_stream

        self.resolver = PathResolver(client, self.config.prefix)
        self.gate = AccessGate(client)
        self.normalizer = MetadataNormalizer(self.config, mime_guesser)
        self.lister = RecursiveLister(client, self.normalizer)

    @property
    def client(self) -> RemoteClient:
        return self._client

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_metadata(self, path: str) -> UniformMetadata | Literal[False]:
        item = self.resolver.resolve(path)
        if item is None:
            return False
        metadata = self.normalizer.normalize(item, dirname(path))
        if path in ("/", ""):
            metadata.path = path
        return metadata

    def has(self, path: str) -> UniformMetadata | Literal[False]:
        return self.get_metadata(path)

    def get_size(self, path: str) -> UniformMetadata | Literal[False]:
        return self.get_metadata(path)

    def get_mimetype(self, path: str) -> UniformMetadata | Literal[False]:
        return self.get_metadata(path)

    def get_timestamp(self, path: str) -> UniformMetadata | Literal[False]:
        return self.get_metadata(path)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, path: str) -> UniformMetadata | Literal[False]:
        item = self.resolver.resolve(path)
        if item is None or not self.gate.permits(item, Capability.CAN_DOWNLOAD):
            return False

        contents = self._client.get_item_contents(item.id)
        return self.normalizer.normalize(item, dirname(path), contents=contents)

    def read_stream(self, path: str) -> UniformMetadata | Literal[False]:
        """Like ``read`` but hands back an open stream; the caller must close it."""
        item = self.resolver.resolve(path)
        if item is None or not self.gate.permits(item, Capability.CAN_DOWNLOAD):
            return False

        url = self._client.get_download_url(item.id)
        stream = self._open_stream(url)
        return self.normalizer.normalize(item, dirname(path), stream=stream)

    def list_contents(
        self, directory: str = "", recursive: bool = False
    ) -> list[UniformMetadata] | Literal[False]:
        # The remote root can't be listed by an empty path; use the home folder.
        if directory in ("/", ""):
            directory = self._client.get_home_folder_name() or directory

        item = self.resolver.resolve(directory)
        if item is None:
            return False
        return self.lister.list_folder(item, directory, recursive)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, path: str, contents: bytes | str) -> UniformMetadata | Literal[False]:
        return self._upload(path, contents, overwrite=True)

    def write_stream(self, path: str, stream: BinaryIO) -> UniformMetadata | Literal[False]:
        return self._upload(path, stream, overwrite=True)

    def update(self, path: str, contents: bytes | str) -> UniformMetadata | Literal[False]:
        return self._upload(path, contents, overwrite=True)

    def update_stream(self, path: str, stream: BinaryIO) -> UniformMetadata | Literal[False]:
        return self._upload(path, stream, overwrite=True)

    def put(self, path: str, contents: bytes | str) -> UniformMetadata | Literal[False]:
        return self._upload(path, contents, overwrite=True)

    def _upload(
        self, path: str, contents: bytes | str | BinaryIO, overwrite: bool = False
    ) -> UniformMetadata | Literal[False]:
        parent = self.resolver.resolve(dirname(path))
        if parent is None or not self.gate.permits(parent, Capability.CAN_UPLOAD):
            return False

        buffered = isinstance(contents, (bytes, str))
        if isinstance(contents, str):
            stream: BinaryIO = io.BytesIO(contents.encode("utf-8"))
        elif isinstance(contents, bytes):
            stream = io.BytesIO(contents)
        else:
            stream = contents

        self._client.upload_file_streamed(stream, parent.id, basename(path), False, overwrite)

        metadata = self.get_metadata(path)
        if metadata and buffered and contents:
            metadata.contents = contents
        return metadata

    # ------------------------------------------------------------------
    # Move / Copy
    # ------------------------------------------------------------------

    def _writable_parent(self, newpath: str) -> RemoteItem | None:
        target = self.resolver.resolve(dirname(newpath))
        if target is None or not self.gate.permits(target, Capability.CAN_UPLOAD):
            return None
        return target

    def rename(self, path: str, newpath: str) -> bool:
        """Move/rename *path* to *newpath*.

        Succeeds when *newpath* exists afterwards.  The source is not
        re-checked: the remote can briefly report both.
        """
        target = self._writable_parent(newpath)
        if target is None:
            return False

        item = self.resolver.resolve(path)
        if item is None:
            return False

        name = basename(newpath)
        self._client.update_item(
            item.id,
            {"FileName": name, "Name": name, "Parent": {"Id": target.id}},
        )
        if not self.has(newpath):
            logger.warning("Renamed %s to %s but the destination does not resolve", path, newpath)
            return False
        return True

    def copy(self, path: str, newpath: str) -> bool:
        target = self._writable_parent(newpath)
        if target is None:
            return False

        item = self.resolver.resolve(path)
        if item is None:
            return False

        # Same leaf name into another folder: native copy.  Anything else
        # needs a new name, which the native copy can't give, so re-upload.
        # Names compare case-insensitively for ASCII letters only.
        same_folder = ascii_lower(dirname(path)) == ascii_lower(dirname(newpath))
        same_name = ascii_lower(basename(path)) == ascii_lower(basename(newpath))
        if not same_folder and same_name:
            self._client.copy_item(target.id, item.id, True)
        else:
            contents = self._client.get_item_contents(item.id)
            self._upload(newpath, contents, overwrite=True)

        return bool(self.has(newpath))

    # ------------------------------------------------------------------
    # Delete / Mkdir
    # ------------------------------------------------------------------

    def delete(self, path: str) -> bool:
        return self.delete_dir(path)

    def delete_dir(self, path: str) -> bool:
        item = self.resolver.resolve(path)
        if item is None or not self.gate.permits(item, Capability.CAN_DELETE_CURRENT_ITEM):
            return False

        self._client.delete_item(item.id)
        logger.debug("Deleted %s (%s)", path, item.id)
        return self.has(path) is False

    def create_dir(self, path: str) -> UniformMetadata | Literal[False]:
        parent = self.resolver.resolve(dirname(path))
        if parent is None or not self.gate.permits(parent, Capability.CAN_ADD_FOLDER):
            return False

        folder = basename(path)
        self._client.create_folder(parent.id, folder, folder, True)
        return self.has(path)

    def read_and_delete(self, path: str) -> bytes | Literal[False]:
        item = self.resolver.resolve(path)
        if item is None:
            return False
        if not (
            self.gate.permits(item, Capability.CAN_DOWNLOAD)
            and self.gate.permits(item, Capability.CAN_DELETE_CURRENT_ITEM)
        ):
            return False

        contents = self._client.get_item_contents(item.id)
        self.delete(path)
        return contents

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def get_visibility(self, path: str) -> UniformMetadata | Literal[False]:
        raise CapabilityNotSupportedError(
            f"{type(self).__name__} does not support visibility. Path: {path}"
        )

    def set_visibility(self, path: str, visibility: str) -> UniformMetadata | Literal[False]:
        raise CapabilityNotSupportedError(
            f"{type(self).__name__} does not support visibility. "
            f"Path: {path}, visibility: {visibility}"
        )
