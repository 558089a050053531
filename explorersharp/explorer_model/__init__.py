"""Domain model for the presented explorer tree.

This package contains non-UI explorer primitives:
- node descriptor and settings-snapshot datatypes
- filesystem reads plus directory-first ordering
- the presentation engine (hiding and folder flattening)
- watch signatures for fs/settings change detection
"""

from __future__ import annotations

from .types import DirectoryEntry, ExplorerSettings, NodeDescriptor
from .fs import is_dotfile, locale_compare, read_directory_entries, relative_path, sort_entries
from .presentation import list_children, try_flatten
from .watch import build_config_watch_signature, build_tree_watch_signature

__all__ = [
    "DirectoryEntry",
    "ExplorerSettings",
    "NodeDescriptor",
    "is_dotfile",
    "locale_compare",
    "read_directory_entries",
    "relative_path",
    "sort_entries",
    "list_children",
    "try_flatten",
    "build_tree_watch_signature",
    "build_config_watch_signature",
]
