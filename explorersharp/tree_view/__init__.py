"""Tree adapter: tree-item metadata, expansion and terminal rendering."""

from __future__ import annotations

from .adapter import OpenCommand, TreeItem, to_tree_item
from .rendering import TreeRow, build_tree_rows, expand_tree, format_tree_row, render_tree
from .theme import UITheme, available_theme_names, resolve_theme

__all__ = [
    "OpenCommand",
    "TreeItem",
    "to_tree_item",
    "TreeRow",
    "expand_tree",
    "build_tree_rows",
    "format_tree_row",
    "render_tree",
    "UITheme",
    "available_theme_names",
    "resolve_theme",
]
