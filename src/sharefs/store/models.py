"""StoreItem model for the reference remote store.

Provides a ``StoreItemBase`` non-table base class.  Subclass with
``table=True`` and a custom ``__tablename__`` to use a different table name.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, LargeBinary
from sqlmodel import Field, SQLModel

from sharefs.fs.types import ItemKind


class StoreItemBase(SQLModel):
    """Base fields for a file or folder node.  Subclass with ``table=True``."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    parent_id: str | None = Field(default=None, index=True)
    odata_type: str = Field(default=ItemKind.FILE.value)
    name: str = Field(default="", index=True)
    description: str = Field(default="")
    content: bytes | None = Field(default=None, sa_type=LargeBinary)
    size_bytes: int = Field(default=0)
    info: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
    )

    @property
    def is_folder(self) -> bool:
        return self.odata_type == ItemKind.FOLDER.value

    @property
    def is_file(self) -> bool:
        return self.odata_type == ItemKind.FILE.value

    def to_odata(self) -> dict[str, Any]:
        """Render the node the way the remote API reports items."""
        payload: dict[str, Any] = {
            "Id": self.id,
            "odata.type": self.odata_type,
            "Name": self.name,
            "FileName": self.name,
            "Description": self.description,
            "Parent": {"Id": self.parent_id} if self.parent_id is not None else None,
            "FileSizeBytes": self.size_bytes,
            "CreationDate": self.created_at.isoformat(),
            "Info": dict(self.info),
        }
        if self.is_file:
            payload["ClientCreatedDate"] = self.created_at.isoformat()
            payload["ClientModifiedDate"] = self.updated_at.isoformat()
        else:
            payload["ProgenyEditDate"] = self.updated_at.isoformat()
        return payload


class StoreItem(StoreItemBase, table=True):
    """Default item table — ``sharefs_items``."""

    __tablename__ = "sharefs_items"
