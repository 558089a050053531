"""Directory presentation: hiding, ordering and flattening of listings.

``list_children`` turns one directory into the ordered nodes a user sees.
Directories whose visible content is a single file, or a single directory,
collapse into one node with a ``/``-joined label (``a/b/c.txt``).

Listing never raises for filesystem problems: unreadable directories are
logged and presented as empty, and a directory that cannot be read while
probing for flattening is simply shown as a plain directory.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path, PurePosixPath

from ..sequence import linq
from .fs import is_dotfile, read_directory_entries, relative_path, sort_entries
from .types import DirectoryEntry, ExplorerSettings, NodeDescriptor

logger = logging.getLogger(__name__)


def list_children(
    root: Path,
    location: Path | None,
    settings: ExplorerSettings,
) -> list[NodeDescriptor]:
    """Return presented children of ``location`` (``None`` means ``root``)."""
    directory = root if location is None else location
    entries, read_error = read_directory_entries(directory)
    if read_error is not None:
        logger.warning("Failed to read %s", directory, exc_info=read_error)
        return []

    hidden = settings.hidden_folders
    nodes: list[NodeDescriptor] = []
    for entry in sort_entries(entries):
        if is_dotfile(entry.name):
            continue
        entry_rel = relative_path(root, entry.path)
        if entry_rel in hidden:
            continue

        if not entry.is_dir:
            nodes.append(_plain_node(entry, entry_rel))
            continue

        flattened = try_flatten(root, entry.path, entry_rel, settings)
        nodes.append(flattened if flattened is not None else _plain_node(entry, entry_rel))
    return nodes


def try_flatten(
    root: Path,
    directory: Path,
    directory_rel: str,
    settings: ExplorerSettings,
) -> NodeDescriptor | None:
    """Collapse ``directory`` into one node when its visible content allows.

    Returns ``None`` when no flattening rule applies or the directory cannot
    be read; callers then present a plain directory node.
    """
    entries, read_error = read_directory_entries(directory)
    if read_error is not None:
        logger.debug("Not flattening unreadable %s: %s", directory, read_error)
        return None

    visible = (
        linq(entries)
        .where(lambda entry: not is_dotfile(entry.name))
        .where(lambda entry: relative_path(root, entry.path) not in settings.hidden_folders)
        .to_list()
    )
    dirs = linq(visible).where(lambda entry: entry.is_dir).to_list()
    files = linq(visible).where(lambda entry: not entry.is_dir).to_list()

    if settings.flatten_single_file and len(files) == 1 and not dirs:
        return _flatten_file(root, directory_rel, files[0])
    if settings.flatten_single_child and len(dirs) == 1 and not files:
        return _flatten_child_directory(root, directory_rel, dirs[0], settings)
    return None


def _plain_node(entry: DirectoryEntry, entry_rel: str) -> NodeDescriptor:
    return NodeDescriptor(
        label=entry.name,
        logical_path=entry_rel,
        storage_location=entry.path,
        is_directory=entry.is_dir,
    )


def _folder_name(directory_rel: str) -> str:
    return PurePosixPath(directory_rel).name


def _flatten_file(root: Path, directory_rel: str, file_entry: DirectoryEntry) -> NodeDescriptor:
    return NodeDescriptor(
        label=f"{_folder_name(directory_rel)}/{file_entry.name}",
        logical_path=relative_path(root, file_entry.path),
        storage_location=file_entry.path,
        is_directory=False,
        origin_folder=directory_rel,
        description="",
    )


def _flatten_child_directory(
    root: Path,
    directory_rel: str,
    child: DirectoryEntry,
    settings: ExplorerSettings,
) -> NodeDescriptor:
    folder_name = _folder_name(directory_rel)
    child_rel = relative_path(root, child.path)
    deeper = try_flatten(root, child.path, child_rel, settings)
    if deeper is None:
        # No origin folder here: the chain ends in an ordinary directory.
        return NodeDescriptor(
            label=f"{folder_name}/{child.name}",
            logical_path=child_rel,
            storage_location=child.path,
            is_directory=True,
        )

    # Re-anchor the origin to this level so it names the top of the chain.
    origin_folder = directory_rel if deeper.origin_folder is not None else None
    return replace(deeper, label=f"{folder_name}/{deeper.label}", origin_folder=origin_folder)


__all__ = [
    "list_children",
    "try_flatten",
]
