"""StoreClient — an in-process RemoteClient backed by SQL tables."""

from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from sharefs.fs.config import PERSONAL_FOLDERS
from sharefs.fs.exceptions import ItemNotFoundError, StorageError
from sharefs.fs.permissions import Capability
from sharefs.fs.types import ItemKind, RemoteItem

from .models import StoreItem

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from typing import BinaryIO

    from sqlalchemy import Engine

logger = logging.getLogger(__name__)

DOWNLOAD_URL_PREFIX = "sharefs-store://items/"

FOLDER_CAPABILITIES: dict[Capability, bool] = {
    Capability.CAN_ADD_FOLDER: True,
    Capability.CAN_ADD_NODE: True,
    Capability.CAN_VIEW: True,
    Capability.CAN_DOWNLOAD: True,
    Capability.CAN_UPLOAD: True,
    Capability.CAN_SEND: True,
    Capability.CAN_DELETE_CURRENT_ITEM: True,
    Capability.CAN_DELETE_CHILD_ITEMS: True,
}

FILE_CAPABILITIES: dict[Capability, bool] = {
    Capability.CAN_VIEW: True,
    Capability.CAN_DOWNLOAD: True,
    Capability.CAN_SEND: True,
    Capability.CAN_DELETE_CURRENT_ITEM: True,
}


def _flags(capabilities: Mapping[Capability | str, Any]) -> dict[str, Any]:
    return {
        (key.value if isinstance(key, Capability) else key): value
        for key, value in capabilities.items()
    }


class StoreClient:
    """Remote store kept in a SQL database, one session per operation.

    The root folder carries the home folder's name; a leading path
    segment equal to that name addresses the root itself.  New folders and
    files get the ``folder_capabilities`` / ``file_capabilities`` flags,
    which ``set_capabilities`` can change per item afterwards.

    Implements ``RemoteClient``.
    """

    def __init__(
        self,
        engine: Engine,
        home_folder_name: str = PERSONAL_FOLDERS,
        *,
        folder_capabilities: Mapping[Capability | str, Any] | None = None,
        file_capabilities: Mapping[Capability | str, Any] | None = None,
        root_id: str = "root",
    ) -> None:
        self._engine = engine
        self.home_folder_name = home_folder_name
        self.root_id = root_id
        self._folder_flags = _flags(
            FOLDER_CAPABILITIES if folder_capabilities is None else folder_capabilities
        )
        self._file_flags = _flags(
            FILE_CAPABILITIES if file_capabilities is None else file_capabilities
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Create the item table and the root folder if needed."""
        table = StoreItem.__table__  # type: ignore[attr-defined]
        SQLModel.metadata.create_all(self._engine, tables=[table])
        with self._session() as session:
            if session.get(StoreItem, self.root_id) is None:
                session.add(
                    StoreItem(
                        id=self.root_id,
                        odata_type=ItemKind.FOLDER.value,
                        name=self.home_folder_name,
                        info=dict(self._folder_flags),
                    )
                )

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Session Management (per-operation only)
    # ------------------------------------------------------------------

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = Session(self._engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Store operation failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Row helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _get_row(session: Session, item_id: str) -> StoreItem:
        row = session.get(StoreItem, item_id)
        if row is None:
            raise ItemNotFoundError(f"No item with id {item_id}")
        return row

    def _get_folder(self, session: Session, item_id: str) -> StoreItem:
        row = self._get_row(session, item_id)
        if not row.is_folder:
            raise StorageError(f"Item {item_id} is not a folder")
        return row

    @staticmethod
    def _children(session: Session, parent_id: str) -> list[StoreItem]:
        statement = (
            select(StoreItem)
            .where(StoreItem.parent_id == parent_id)
            .order_by(StoreItem.created_at, StoreItem.name)  # type: ignore[arg-type]
        )
        return list(session.exec(statement).all())

    @staticmethod
    def _child_named(session: Session, parent_id: str, name: str) -> StoreItem | None:
        statement = select(StoreItem).where(
            StoreItem.parent_id == parent_id,
            StoreItem.name == name,
        )
        return session.exec(statement).first()

    def _descendants(self, session: Session, row: StoreItem) -> list[StoreItem]:
        found: list[StoreItem] = []
        pending = [row]
        while pending:
            current = pending.pop()
            children = self._children(session, current.id)
            found.extend(children)
            pending.extend(child for child in children if child.is_folder)
        return found

    def _delete_tree(self, session: Session, row: StoreItem) -> None:
        for descendant in self._descendants(session, row):
            session.delete(descendant)
        session.delete(row)

    def _to_remote(self, session: Session, row: StoreItem, include_children: bool) -> RemoteItem:
        payload = row.to_odata()
        if include_children:
            payload["Children"] = [child.to_odata() for child in self._children(session, row.id)]
        return RemoteItem.from_odata(payload)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_home_folder_name(self) -> str:
        return self.home_folder_name

    def get_item_by_path(self, path: str) -> RemoteItem:
        segments = [segment for segment in path.split("/") if segment]
        if segments and segments[0] == self.home_folder_name:
            segments = segments[1:]

        with self._session() as session:
            row = self._get_row(session, self.root_id)
            for segment in segments:
                child = self._child_named(session, row.id, segment) if row.is_folder else None
                if child is None:
                    raise ItemNotFoundError(f"No item at {path}")
                row = child
            return self._to_remote(session, row, include_children=False)

    def get_item_by_id(self, item_id: str, include_children: bool = False) -> RemoteItem:
        with self._session() as session:
            row = self._get_row(session, item_id)
            return self._to_remote(session, row, include_children)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def get_item_contents(self, item_id: str) -> bytes:
        with self._session() as session:
            row = self._get_row(session, item_id)
            if not row.is_file:
                raise StorageError(f"Item {item_id} is not a file")
            return row.content or b""

    def get_download_url(self, item_id: str) -> str:
        with self._session() as session:
            row = self._get_row(session, item_id)
            if not row.is_file:
                raise StorageError(f"Item {item_id} is not a file")
        return f"{DOWNLOAD_URL_PREFIX}{item_id}"

    def open_download(self, url: str) -> BinaryIO:
        """Serve a URL from ``get_download_url``.  Usable as a stream opener."""
        if not url.startswith(DOWNLOAD_URL_PREFIX):
            raise StorageError(f"Not a store download URL: {url}")
        return io.BytesIO(self.get_item_contents(url[len(DOWNLOAD_URL_PREFIX):]))

    def upload_file_streamed(
        self,
        stream: BinaryIO,
        parent_id: str,
        filename: str,
        unzip: bool = False,
        overwrite: bool = False,
    ) -> None:
        """Store the stream's bytes as *filename* under *parent_id*.

        ``unzip`` is accepted for interface compatibility; archives are
        stored as-is.
        """
        data = stream.read()
        if isinstance(data, str):
            data = data.encode("utf-8")

        with self._session() as session:
            self._get_folder(session, parent_id)
            existing = self._child_named(session, parent_id, filename)
            if existing is not None:
                if existing.is_folder:
                    raise StorageError(f"A folder named {filename} already exists")
                if not overwrite:
                    raise StorageError(f"{filename} already exists")
                existing.content = data
                existing.size_bytes = len(data)
                existing.updated_at = datetime.now(UTC)
                session.add(existing)
                return

            session.add(
                StoreItem(
                    parent_id=parent_id,
                    odata_type=ItemKind.FILE.value,
                    name=filename,
                    content=data,
                    size_bytes=len(data),
                    info=dict(self._file_flags),
                )
            )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update_item(self, item_id: str, fields: Mapping[str, Any]) -> None:
        with self._session() as session:
            row = self._get_row(session, item_id)
            if row.id == self.root_id:
                raise StorageError("The root folder cannot be modified")

            name = fields.get("FileName") or fields.get("Name") or row.name
            parent_id = (fields.get("Parent") or {}).get("Id") or row.parent_id
            assert parent_id is not None

            if parent_id != row.parent_id:
                self._get_folder(session, parent_id)
                if row.is_folder and (
                    parent_id == row.id
                    or parent_id in {d.id for d in self._descendants(session, row)}
                ):
                    raise StorageError("A folder cannot be moved into itself")

            clash = self._child_named(session, parent_id, name)
            if clash is not None and clash.id != row.id:
                raise StorageError(f"{name} already exists in the destination folder")

            row.name = name
            row.parent_id = parent_id
            if "Description" in fields:
                row.description = fields["Description"]
            row.updated_at = datetime.now(UTC)
            session.add(row)

    def copy_item(self, target_parent_id: str, item_id: str, overwrite: bool = False) -> None:
        with self._session() as session:
            source = self._get_row(session, item_id)
            self._get_folder(session, target_parent_id)
            if source.is_folder and (
                target_parent_id == source.id
                or target_parent_id in {d.id for d in self._descendants(session, source)}
            ):
                raise StorageError("A folder cannot be copied into itself")

            existing = self._child_named(session, target_parent_id, source.name)
            if existing is not None:
                if existing.id == source.id:
                    raise StorageError("An item cannot be copied onto itself")
                if not overwrite:
                    raise StorageError(f"{source.name} already exists in the destination folder")
                self._delete_tree(session, existing)
                session.flush()

            self._copy_tree(session, source, target_parent_id)

    def _copy_tree(self, session: Session, source: StoreItem, parent_id: str) -> None:
        copied = StoreItem(
            parent_id=parent_id,
            odata_type=source.odata_type,
            name=source.name,
            description=source.description,
            content=source.content,
            size_bytes=source.size_bytes,
            info=dict(source.info),
        )
        session.add(copied)
        if source.is_folder:
            for child in self._children(session, source.id):
                self._copy_tree(session, child, copied.id)

    def delete_item(self, item_id: str) -> None:
        with self._session() as session:
            row = self._get_row(session, item_id)
            if row.id == self.root_id:
                raise StorageError("The root folder cannot be deleted")
            self._delete_tree(session, row)
        logger.debug("Deleted store item %s", item_id)

    def create_folder(
        self,
        parent_id: str,
        name: str,
        description: str = "",
        overwrite: bool = False,
    ) -> None:
        with self._session() as session:
            self._get_folder(session, parent_id)
            existing = self._child_named(session, parent_id, name)
            if existing is not None:
                if existing.is_folder and overwrite:
                    return
                raise StorageError(f"{name} already exists")

            session.add(
                StoreItem(
                    parent_id=parent_id,
                    odata_type=ItemKind.FOLDER.value,
                    name=name,
                    description=description,
                    info=dict(self._folder_flags),
                )
            )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def set_capabilities(self, item_id: str, flags: Mapping[Capability | str, Any]) -> None:
        """Merge *flags* into an item's capability bag."""
        with self._session() as session:
            row = self._get_row(session, item_id)
            row.info = {**row.info, **_flags(flags)}
            session.add(row)

    def add_item(
        self,
        parent_id: str,
        name: str,
        odata_type: str,
        info: Mapping[Capability | str, Any] | None = None,
    ) -> str:
        """Insert a node of an arbitrary remote type (links, notes, ...)."""
        with self._session() as session:
            self._get_folder(session, parent_id)
            row = StoreItem(
                parent_id=parent_id,
                odata_type=odata_type,
                name=name,
                info=_flags(info or {}),
            )
            session.add(row)
            return row.id
