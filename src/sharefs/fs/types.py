"""Item types: RemoteItem snapshots and the UniformMetadata record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from datetime import datetime
    from typing import BinaryIO

    from .permissions import Capability


class ItemKind(str, Enum):
    """The two remote node kinds the filesystem layer understands."""

    FILE = "ShareFile.Api.Models.File"
    FOLDER = "ShareFile.Api.Models.Folder"

    @classmethod
    def from_odata(cls, odata_type: str | None) -> ItemKind | None:
        """Map a remote type tag to a kind, or ``None`` for anything else."""
        for kind in cls:
            if kind.value == odata_type:
                return kind
        return None


@dataclass
class RemoteItem:
    """Snapshot of a node in the remote tree.

    Received from a remote client and discarded once the operation that
    fetched it completes.
    """

    id: str
    odata_type: str
    name: str
    parent_id: str | None = None
    size_bytes: int = 0
    client_modified_date: datetime | str | None = None
    client_created_date: datetime | str | None = None
    creation_date: datetime | str | None = None
    progeny_edit_date: datetime | str | None = None
    info: dict[str, Any] = field(default_factory=dict)
    """Sparse capability bag.  A missing key means the capability is not granted."""

    children: list[RemoteItem] | None = None
    """Populated only when the lookup requested children."""

    raw: dict[str, Any] = field(default_factory=dict)
    """The untouched remote payload, kept for diagnostics."""

    @property
    def kind(self) -> ItemKind | None:
        return ItemKind.from_odata(self.odata_type)

    @property
    def is_file(self) -> bool:
        return self.kind is ItemKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind is ItemKind.FOLDER

    def grants(self, capability: Capability) -> bool:
        """True only when the flag is present and exactly boolean ``True``."""
        return self.info.get(capability.value) is True

    @classmethod
    def from_odata(cls, payload: dict[str, Any]) -> RemoteItem:
        """Build an item from the remote JSON representation."""
        parent = payload.get("Parent") or {}
        children = payload.get("Children")
        return cls(
            id=str(payload["Id"]),
            odata_type=payload.get("odata.type", ""),
            name=payload.get("FileName") or payload.get("Name") or "",
            parent_id=str(parent["Id"]) if parent.get("Id") is not None else None,
            size_bytes=int(payload.get("FileSizeBytes") or 0),
            client_modified_date=payload.get("ClientModifiedDate"),
            client_created_date=payload.get("ClientCreatedDate"),
            creation_date=payload.get("CreationDate"),
            progeny_edit_date=payload.get("ProgenyEditDate"),
            info=dict(payload.get("Info") or {}),
            children=(
                [cls.from_odata(child) for child in children] if children is not None else None
            ),
            raw=payload,
        )


@dataclass
class UniformMetadata:
    """Normalized metadata for a resolved file or folder.

    ``contents`` and ``stream`` are ``False`` unless the operation that
    produced the record was asked for file content.  ``timestamp`` is
    ``False`` when the remote item carries no usable date.
    """

    path: str
    type: Literal["file", "dir"]
    id: str
    odata_type: str
    size: int = 0
    mimetype: str = ""
    timestamp: int | Literal[False] = False
    dirname: str = ""
    basename: str = ""
    filename: str = ""
    extension: str = ""
    parent_id: str | None = None
    contents: bytes | str | Literal[False] = False
    stream: BinaryIO | Literal[False] = False
    remote_item: RemoteItem | None = None

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    def to_dict(self) -> dict[str, Any]:
        """Render the flat filesystem-array shape."""
        data: dict[str, Any] = {
            "timestamp": self.timestamp,
            "path": self.path,
            "parentId": self.parent_id,
            "id": self.id,
            "odata.type": self.odata_type,
            "mimetype": self.mimetype,
            "dirname": self.dirname,
            "extension": self.extension,
            "filename": self.filename,
            "basename": self.basename,
            "type": self.type,
            "size": self.size,
            "contents": self.contents,
            "stream": self.stream,
        }
        if self.remote_item is not None:
            data["sharefile_item"] = self.remote_item.raw
        return data
