"""MetadataNormalizer — remote item to UniformMetadata."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Literal

from .types import ItemKind, UniformMetadata
from .utils import dirname, guess_mime_type, join_path, split_extension

if TYPE_CHECKING:
    from typing import BinaryIO

    from .config import AdapterConfig
    from .protocol import MimeGuesser
    from .types import RemoteItem

logger = logging.getLogger(__name__)

DIRECTORY_MIME_TYPE = "inode/directory"


def _parse_date(value: str) -> datetime | None:
    """Parse an ISO 8601 or RFC 2822 date string, ``None`` if it is neither."""
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def item_timestamp(item: RemoteItem) -> int | Literal[False]:
    """Epoch seconds of the first available date, or ``False`` if none is set.

    Preference: client-modified, client-created, creation, progeny-edit.
    Naive datetimes are taken as UTC.  An unparseable first date also
    yields ``False``.
    """
    for value in (
        item.client_modified_date,
        item.client_created_date,
        item.creation_date,
        item.progeny_edit_date,
    ):
        if not value:
            continue
        if isinstance(value, str):
            parsed = _parse_date(value)
            if parsed is None:
                logger.debug("Unparseable date %r on item %s", value, item.id)
                return False
            value = parsed
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return int(value.timestamp())
    return False


class MetadataNormalizer:
    """Builds ``UniformMetadata`` records for files and folders."""

    def __init__(self, config: AdapterConfig, mime_guesser: MimeGuesser | None = None) -> None:
        self._config = config
        self._guess_mime_type = mime_guesser or guess_mime_type

    def _dirname(self, path: str) -> str:
        directory = dirname(path)
        if directory == self._config.home_folder_label:
            return ""
        return directory

    def normalize(
        self,
        item: RemoteItem,
        base_path: str = "",
        contents: bytes | str | None = None,
        stream: BinaryIO | None = None,
    ) -> UniformMetadata:
        kind = item.kind
        if kind is None:
            msg = f"Cannot normalize remote item of type {item.odata_type!r}"
            raise ValueError(msg)
        if contents and stream is not None:
            msg = "Pass either contents or stream, not both"
            raise ValueError(msg)

        path = join_path(base_path, item.name)
        filename, extension = split_extension(item.name)

        if kind is ItemKind.FILE:
            type_ = "file"
            mimetype = self._guess_mime_type(item.name, contents)
            size = item.size_bytes
        else:
            type_ = "dir"
            mimetype = DIRECTORY_MIME_TYPE
            size = 0

        return UniformMetadata(
            path=path,
            type=type_,
            id=item.id,
            odata_type=item.odata_type,
            size=size,
            mimetype=mimetype,
            timestamp=item_timestamp(item),
            dirname=self._dirname(path),
            basename=filename,
            filename=filename,
            extension=extension,
            parent_id=item.parent_id,
            contents=contents if contents else False,
            stream=stream if stream is not None else False,
            remote_item=item if self._config.return_remote_item else None,
        )
