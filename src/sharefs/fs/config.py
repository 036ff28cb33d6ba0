"""AdapterConfig."""

from __future__ import annotations

from dataclasses import dataclass

PERSONAL_FOLDERS = "Personal Folders"


@dataclass
class AdapterConfig:
    """Configuration for a ``ShareFileAdapter``."""

    prefix: str = ""
    """Remote path every logical path is scoped under, e.g. "Shared/Project"."""

    return_remote_item: bool = False
    """If True, the raw ``RemoteItem`` is attached to returned metadata."""

    home_folder_label: str = PERSONAL_FOLDERS
    """Directory name collapsed to "" when computing ``dirname``."""

    def __post_init__(self) -> None:
        self.prefix = self.prefix.strip().strip("/")
