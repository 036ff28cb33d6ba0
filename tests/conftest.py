"""Shared fixtures for sharefs tests."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest
from sqlmodel import create_engine

from sharefs.fs.adapter import ShareFileAdapter
from sharefs.store.client import StoreClient

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy import Engine


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine, disposed after each test."""
    eng = create_engine("sqlite://", echo=False)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine: Engine) -> StoreClient:
    """Reference remote store with its root folder created."""
    client = StoreClient(engine)
    client.open()
    return client


@pytest.fixture
def adapter(store: StoreClient) -> ShareFileAdapter:
    """Adapter over the reference store, serving streams from the store itself."""
    return ShareFileAdapter(store, stream_opener=store.open_download)


@pytest.fixture
def create_dir(store: StoreClient) -> Callable[[str], str]:
    """Create a folder (and missing parents) directly in the store; returns its id."""

    def _create(path: str) -> str:
        item = store.get_item_by_path("/")
        walked = ""
        for segment in [s for s in path.split("/") if s]:
            store.create_folder(item.id, segment, overwrite=True)
            walked = f"{walked}/{segment}"
            item = store.get_item_by_path(walked)
        return item.id

    return _create


@pytest.fixture
def create_file(
    store: StoreClient, create_dir: Callable[[str], str]
) -> Callable[[str, bytes], str]:
    """Upload a file directly into the store; returns its id."""

    def _create(path: str, contents: bytes) -> str:
        parent, _, name = path.strip("/").rpartition("/")
        parent_id = create_dir(parent)
        store.upload_file_streamed(io.BytesIO(contents), parent_id, name, overwrite=True)
        return store.get_item_by_path("/" + path.strip("/")).id

    return _create
