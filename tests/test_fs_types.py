"""Tests for RemoteItem, ItemKind and UniformMetadata."""

from __future__ import annotations

from sharefs.fs.permissions import Capability
from sharefs.fs.types import ItemKind, RemoteItem, UniformMetadata

FOLDER_PAYLOAD = {
    "Id": "fo123",
    "odata.type": "ShareFile.Api.Models.Folder",
    "Name": "Reports",
    "FileName": "Reports",
    "Parent": {"Id": "root"},
    "FileSizeBytes": 2048,
    "CreationDate": "2024-03-01T10:00:00Z",
    "ProgenyEditDate": "2024-03-02T10:00:00Z",
    "Info": {"CanUpload": True, "CanAddFolder": False},
    "Children": [
        {
            "Id": "fi1",
            "odata.type": "ShareFile.Api.Models.File",
            "FileName": "q1.csv",
            "Parent": {"Id": "fo123"},
            "FileSizeBytes": 42,
        },
        {
            "Id": "ln1",
            "odata.type": "ShareFile.Api.Models.Link",
            "Name": "portal",
        },
    ],
}


class TestItemKind:
    def test_known_kinds(self):
        assert ItemKind.from_odata("ShareFile.Api.Models.File") is ItemKind.FILE
        assert ItemKind.from_odata("ShareFile.Api.Models.Folder") is ItemKind.FOLDER

    def test_unknown_kinds(self):
        assert ItemKind.from_odata("ShareFile.Api.Models.Link") is None
        assert ItemKind.from_odata("") is None
        assert ItemKind.from_odata(None) is None


class TestRemoteItemFromOdata:
    def test_fields(self):
        item = RemoteItem.from_odata(FOLDER_PAYLOAD)
        assert item.id == "fo123"
        assert item.kind is ItemKind.FOLDER
        assert item.is_folder is True
        assert item.name == "Reports"
        assert item.parent_id == "root"
        assert item.size_bytes == 2048
        assert item.creation_date == "2024-03-01T10:00:00Z"
        assert item.client_modified_date is None
        assert item.raw is FOLDER_PAYLOAD

    def test_children_keep_order(self):
        item = RemoteItem.from_odata(FOLDER_PAYLOAD)
        assert item.children is not None
        assert [child.id for child in item.children] == ["fi1", "ln1"]
        assert item.children[0].is_file is True
        assert item.children[1].kind is None
        assert item.children[1].name == "portal"

    def test_children_absent_unless_requested(self):
        item = RemoteItem.from_odata({"Id": 1, "odata.type": "ShareFile.Api.Models.File"})
        assert item.children is None
        assert item.id == "1"
        assert item.parent_id is None
        assert item.info == {}

    def test_null_parent(self):
        item = RemoteItem.from_odata(
            {"Id": "root", "odata.type": "ShareFile.Api.Models.Folder", "Parent": None}
        )
        assert item.parent_id is None


class TestGrants:
    def test_true_flag(self):
        item = RemoteItem.from_odata(FOLDER_PAYLOAD)
        assert item.grants(Capability.CAN_UPLOAD) is True

    def test_false_flag(self):
        item = RemoteItem.from_odata(FOLDER_PAYLOAD)
        assert item.grants(Capability.CAN_ADD_FOLDER) is False

    def test_absent_flag(self):
        item = RemoteItem.from_odata(FOLDER_PAYLOAD)
        assert item.grants(Capability.CAN_DOWNLOAD) is False

    def test_non_boolean_flag(self):
        item = RemoteItem(
            id="x",
            odata_type=ItemKind.FOLDER.value,
            name="x",
            info={"CanDownload": "true", "CanUpload": 1},
        )
        assert item.grants(Capability.CAN_DOWNLOAD) is False
        assert item.grants(Capability.CAN_UPLOAD) is False


class TestUniformMetadata:
    def test_defaults(self):
        meta = UniformMetadata(path="a.txt", type="file", id="1", odata_type=ItemKind.FILE.value)
        assert meta.contents is False
        assert meta.stream is False
        assert meta.timestamp is False
        assert meta.parent_id is None
        assert meta.remote_item is None
        assert meta.is_file is True
        assert meta.is_dir is False

    def test_to_dict_keys(self):
        meta = UniformMetadata(
            path="docs/a.txt",
            type="file",
            id="1",
            odata_type=ItemKind.FILE.value,
            parent_id="fo1",
            dirname="docs",
            basename="a",
            filename="a",
            extension="txt",
        )
        data = meta.to_dict()
        assert data["parentId"] == "fo1"
        assert data["odata.type"] == "ShareFile.Api.Models.File"
        assert data["contents"] is False
        assert "sharefile_item" not in data
