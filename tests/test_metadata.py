"""Tests for MetadataNormalizer and item timestamps."""

from __future__ import annotations

import io
from datetime import UTC, datetime, timedelta, timezone

import pytest

from sharefs.fs.config import AdapterConfig
from sharefs.fs.metadata import DIRECTORY_MIME_TYPE, MetadataNormalizer, item_timestamp
from sharefs.fs.types import ItemKind, RemoteItem

STAMP = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _file(name: str = "report.csv", **kwargs) -> RemoteItem:
    return RemoteItem(id="f1", odata_type=ItemKind.FILE.value, name=name, **kwargs)


def _folder(name: str = "Reports", **kwargs) -> RemoteItem:
    return RemoteItem(id="d1", odata_type=ItemKind.FOLDER.value, name=name, **kwargs)


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


class TestItemTimestamp:
    def test_client_modified_preferred(self):
        item = _file(
            client_modified_date=STAMP,
            client_created_date=STAMP - timedelta(days=1),
            creation_date=STAMP - timedelta(days=2),
        )
        assert item_timestamp(item) == int(STAMP.timestamp())

    def test_falls_through_to_progeny_edit(self):
        item = _folder(progeny_edit_date="2024-03-01T12:00:00Z")
        assert item_timestamp(item) == int(STAMP.timestamp())

    def test_creation_before_progeny(self):
        item = _folder(creation_date=STAMP, progeny_edit_date=STAMP + timedelta(days=5))
        assert item_timestamp(item) == int(STAMP.timestamp())

    def test_empty_strings_skipped(self):
        item = _file(client_modified_date="", client_created_date="2024-03-01T12:00:00+00:00")
        assert item_timestamp(item) == int(STAMP.timestamp())

    def test_naive_is_utc(self):
        item = _file(creation_date=datetime(2024, 3, 1, 12, 0))
        assert item_timestamp(item) == int(STAMP.timestamp())

    def test_offset_respected(self):
        plus_two = timezone(timedelta(hours=2))
        item = _file(creation_date=datetime(2024, 3, 1, 14, 0, tzinfo=plus_two))
        assert item_timestamp(item) == int(STAMP.timestamp())

    def test_rfc2822_string(self):
        item = _file(client_modified_date="Mon, 21 Oct 2019 12:45:33 GMT")
        assert item_timestamp(item) == 1571661933

    def test_seven_digit_fraction(self):
        item = _file(client_modified_date="2019-10-21T12:45:33.1970000Z")
        assert item_timestamp(item) == 1571661933

    def test_unparseable_string_is_false(self):
        item = _file(client_modified_date="yesterday-ish", creation_date=STAMP)
        assert item_timestamp(item) is False

    def test_unparseable_date_does_not_break_normalize(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        meta = normalizer.normalize(_file(client_modified_date="not a date"), "")
        assert meta.timestamp is False
        assert meta.path == "report.csv"

    def test_no_dates_is_false(self):
        assert item_timestamp(_file()) is False


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_file(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        meta = normalizer.normalize(_file(parent_id="d1", size_bytes=10), "Reports/2024")
        assert meta.path == "Reports/2024/report.csv"
        assert meta.type == "file"
        assert meta.size == 10
        assert meta.mimetype == "text/csv"
        assert meta.dirname == "Reports/2024"
        assert meta.basename == "report"
        assert meta.filename == "report"
        assert meta.extension == "csv"
        assert meta.parent_id == "d1"
        assert meta.timestamp is False
        assert meta.contents is False
        assert meta.stream is False

    def test_folder(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        meta = normalizer.normalize(_folder(size_bytes=999), "")
        assert meta.path == "Reports"
        assert meta.type == "dir"
        assert meta.mimetype == DIRECTORY_MIME_TYPE
        assert meta.size == 0
        assert meta.dirname == ""

    @pytest.mark.parametrize("base", ["", ".", "/", "//"])
    def test_base_path_trimmed(self, base: str):
        normalizer = MetadataNormalizer(AdapterConfig())
        assert normalizer.normalize(_file(), base).path == "report.csv"

    def test_home_folder_dirname_collapsed(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        meta = normalizer.normalize(_file(), "Personal Folders")
        assert meta.path == "Personal Folders/report.csv"
        assert meta.dirname == ""

    def test_custom_home_folder_label(self):
        normalizer = MetadataNormalizer(AdapterConfig(home_folder_label="My Files"))
        assert normalizer.normalize(_file(), "My Files").dirname == ""
        assert normalizer.normalize(_file(), "Personal Folders").dirname == "Personal Folders"

    def test_contents_attached(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        assert normalizer.normalize(_file(), "", contents=b"a,b").contents == b"a,b"
        assert normalizer.normalize(_file(), "", contents=b"").contents is False

    def test_stream_attached(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        stream = io.BytesIO(b"a,b")
        meta = normalizer.normalize(_file(), "", stream=stream)
        assert meta.stream is stream
        assert meta.contents is False

    def test_contents_and_stream_exclusive(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        with pytest.raises(ValueError, match="not both"):
            normalizer.normalize(_file(), "", contents=b"x", stream=io.BytesIO(b"x"))

    def test_mime_guesser_receives_contents(self):
        seen: list[tuple[str, object]] = []

        def guesser(filename: str, content: bytes | str | None = None) -> str:
            seen.append((filename, content))
            return "application/x-custom"

        normalizer = MetadataNormalizer(AdapterConfig(), guesser)
        meta = normalizer.normalize(_file(), "", contents=b"data")
        assert meta.mimetype == "application/x-custom"
        assert seen == [("report.csv", b"data")]

    def test_folders_skip_mime_guessing(self):
        def guesser(filename: str, content: bytes | str | None = None) -> str:
            raise AssertionError("folders have a fixed mimetype")

        normalizer = MetadataNormalizer(AdapterConfig(), guesser)
        assert normalizer.normalize(_folder(), "").mimetype == DIRECTORY_MIME_TYPE

    def test_remote_item_only_when_configured(self):
        item = _file()
        assert MetadataNormalizer(AdapterConfig()).normalize(item, "").remote_item is None
        attached = MetadataNormalizer(AdapterConfig(return_remote_item=True)).normalize(item, "")
        assert attached.remote_item is item

    def test_unknown_kind_rejected(self):
        normalizer = MetadataNormalizer(AdapterConfig())
        link = RemoteItem(id="l1", odata_type="ShareFile.Api.Models.Link", name="portal")
        with pytest.raises(ValueError, match="Cannot normalize"):
            normalizer.normalize(link, "")


class TestAdapterConfig:
    @pytest.mark.parametrize(
        ("prefix", "expected"),
        [
            pytest.param("", "", id="empty"),
            pytest.param("/Shared/", "Shared", id="slashes"),
            pytest.param(" Shared/Team ", "Shared/Team", id="whitespace"),
        ],
    )
    def test_prefix_normalized(self, prefix: str, expected: str):
        assert AdapterConfig(prefix=prefix).prefix == expected

    def test_defaults(self):
        config = AdapterConfig()
        assert config.return_remote_item is False
        assert config.home_folder_label == "Personal Folders"
