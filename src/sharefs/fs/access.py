"""AccessGate — capability checks against remote permission bags."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import ShareFSError, StorageError
from .permissions import Capability
from .types import ItemKind

if TYPE_CHECKING:
    from .protocol import RemoteClient
    from .types import RemoteItem

logger = logging.getLogger(__name__)


class AccessGate:
    """Decides whether an item permits an operation.

    Files don't carry their own rights: a file is checked against its
    parent folder, and deleting a file needs the parent's
    ``CanDeleteChildItems`` flag.
    """

    def __init__(self, client: RemoteClient) -> None:
        self._client = client

    def subject_for(
        self, item: RemoteItem, capability: Capability
    ) -> tuple[RemoteItem, Capability]:
        """Return the item and capability the check is actually evaluated on."""
        if item.kind is not ItemKind.FILE:
            return item, capability

        subject = item
        if item.parent_id is not None:
            try:
                subject = self._client.get_item_by_id(item.parent_id)
            except ShareFSError:
                raise
            except Exception as e:
                msg = f"Parent lookup failed for {item.name} ({item.parent_id}): {e}"
                raise StorageError(msg) from e
        if capability is Capability.CAN_DELETE_CURRENT_ITEM:
            capability = Capability.CAN_DELETE_CHILD_ITEMS
        return subject, capability

    def permits(self, item: RemoteItem, capability: Capability) -> bool:
        subject, effective = self.subject_for(item, capability)
        allowed = subject.grants(effective)
        if not allowed:
            logger.debug(
                "Access denied: %s (%s) lacks %s", item.name, subject.id, effective.value
            )
        return allowed
