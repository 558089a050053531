"""Map node descriptors onto tree-item metadata for a host tree view."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..explorer_model import NodeDescriptor

COLLAPSIBLE_NONE = "none"
COLLAPSIBLE_COLLAPSED = "collapsed"

CONTEXT_FOLDER = "folder"
CONTEXT_FILE = "file"
CONTEXT_FLAT_FOLDER = "flatFolder"

OPEN_FILE_COMMAND = "explorersharp.openFile"


@dataclass(frozen=True)
class OpenCommand:
    """Action a host runs when a file item is activated."""

    command: str
    title: str
    target: Path


@dataclass(frozen=True)
class TreeItem:
    """Host-facing view of one node; carries everything hide/open need."""

    label: str
    collapsible: str
    context_value: str
    tooltip: str
    logical_path: str
    storage_location: Path
    origin_folder: str | None = None
    description: str | None = None
    command: OpenCommand | None = None


def context_value_for(node: NodeDescriptor) -> str:
    if node.is_flattened:
        return CONTEXT_FLAT_FOLDER
    return CONTEXT_FOLDER if node.is_directory else CONTEXT_FILE


def to_tree_item(node: NodeDescriptor) -> TreeItem:
    """Build the ``TreeItem`` for ``node``; files get an open command."""
    command = None
    if not node.is_directory:
        command = OpenCommand(command=OPEN_FILE_COMMAND, title="Open File", target=node.storage_location)
    return TreeItem(
        label=node.label,
        collapsible=COLLAPSIBLE_COLLAPSED if node.is_directory else COLLAPSIBLE_NONE,
        context_value=context_value_for(node),
        tooltip=node.logical_path,
        logical_path=node.logical_path,
        storage_location=node.storage_location,
        origin_folder=node.origin_folder,
        description=node.description,
        command=command,
    )


__all__ = [
    "COLLAPSIBLE_NONE",
    "COLLAPSIBLE_COLLAPSED",
    "CONTEXT_FOLDER",
    "CONTEXT_FILE",
    "CONTEXT_FLAT_FOLDER",
    "OPEN_FILE_COMMAND",
    "OpenCommand",
    "TreeItem",
    "context_value_for",
    "to_tree_item",
]
