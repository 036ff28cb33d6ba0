"""Capability flags carried in a remote item's permission bag."""

from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    """Named permission flag reported by the remote store for an item."""

    CAN_ADD_FOLDER = "CanAddFolder"
    CAN_ADD_NODE = "CanAddNode"
    CAN_VIEW = "CanView"
    CAN_DOWNLOAD = "CanDownload"
    CAN_UPLOAD = "CanUpload"
    CAN_SEND = "CanSend"
    CAN_DELETE_CURRENT_ITEM = "CanDeleteCurrentItem"
    CAN_DELETE_CHILD_ITEMS = "CanDeleteChildItems"
    CAN_MANAGE_PERMISSIONS = "CanManagePermissions"
    CAN_CREATE_OFFICE_DOCUMENTS = "CanCreateOfficeDocuments"
