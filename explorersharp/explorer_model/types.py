"""Domain datatypes for presented explorer nodes and listing settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DirectoryEntry:
    """One raw directory-child row as read from the filesystem."""

    name: str
    path: Path
    is_dir: bool


@dataclass(frozen=True)
class NodeDescriptor:
    """One node the explorer presents to the user.

    ``logical_path`` is the workspace-relative path of the deepest real entry
    the node stands for. ``storage_location`` is where to read children or
    file content from. ``origin_folder`` is only set on nodes produced by
    flattening and names the topmost folder collapsed into the node.
    """

    label: str
    logical_path: str
    storage_location: Path
    is_directory: bool
    origin_folder: str | None = None
    description: str | None = None

    @property
    def is_flattened(self) -> bool:
        return self.origin_folder is not None

    @property
    def hide_target(self) -> str:
        """Relative path that hide/unhide should address for this node."""
        return self.origin_folder or self.logical_path


@dataclass(frozen=True)
class ExplorerSettings:
    """Snapshot of listing configuration taken once per listing call."""

    hidden_folders: frozenset[str] = frozenset()
    flatten_single_file: bool = True
    flatten_single_child: bool = True


__all__ = [
    "DirectoryEntry",
    "NodeDescriptor",
    "ExplorerSettings",
]
