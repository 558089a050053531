"""Tree expansion and row formatting for the terminal tree view."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from ..explorer_model import NodeDescriptor
from ..runtime.listing_scheduler import ListingScheduler
from .adapter import TreeItem, to_tree_item
from .theme import DEFAULT_THEME, UITheme

ROOT_KEY = ""


@dataclass(frozen=True)
class TreeRow:
    """One rendered row: tree item, nesting depth, expansion state."""

    item: TreeItem
    depth: int
    expanded: bool = False


def expand_tree(
    scheduler: ListingScheduler,
    max_depth: int | None = None,
) -> dict[str, list[NodeDescriptor]]:
    """List the tree level by level, running each level's listings concurrently.

    Returns children keyed by parent logical path (``ROOT_KEY`` for the root).
    ``max_depth`` bounds how many levels are listed; ``None`` lists everything.
    Parents whose listing went stale during a refresh are left out.
    """
    children_by_parent: dict[str, list[NodeDescriptor]] = {}
    level: list[NodeDescriptor | None] = [None]
    depth = 0
    while level and (max_depth is None or depth < max_depth):
        request_ids = {scheduler.schedule(node): node for node in level}
        results = scheduler.collect(request_ids)
        next_level: list[NodeDescriptor | None] = []
        for request_id, node in request_ids.items():
            result = results.get(request_id)
            if result is None:
                continue
            key = ROOT_KEY if node is None else node.logical_path
            children_by_parent[key] = result.children
            next_level.extend(child for child in result.children if child.is_directory)
        level = next_level
        depth += 1
    return children_by_parent


def build_tree_rows(children_by_parent: dict[str, list[NodeDescriptor]]) -> list[TreeRow]:
    """Flatten an expanded tree into display rows in depth-first order."""
    rows: list[TreeRow] = []

    def visit(parent_key: str, depth: int) -> None:
        for child in children_by_parent.get(parent_key, ()):
            expanded = child.is_directory and child.logical_path in children_by_parent
            rows.append(TreeRow(item=to_tree_item(child), depth=depth, expanded=expanded))
            if expanded:
                visit(child.logical_path, depth + 1)

    visit(ROOT_KEY, 0)
    return rows


def file_color_for(label: str, theme: UITheme | None = None) -> str:
    """Return ANSI color used for file names based on suffix."""
    active_theme = theme or DEFAULT_THEME
    suffix = PurePosixPath(label).suffix.lower()
    if suffix in {".py", ".pyi", ".pyw"}:
        return active_theme.tree_file_python
    return active_theme.tree_file_default


def format_tree_row(row: TreeRow, theme: UITheme | None = None) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    item = row.item
    reset = active_theme.reset
    marker_color = active_theme.tree_marker
    suffix = ""
    if item.description:
        suffix = f" {active_theme.tree_description}{item.description}{reset}"

    if item.command is None:
        indent = "  " * row.depth
        marker = "▾ " if row.expanded else "▸ "
        return f"{indent}{marker_color}{marker}{reset}{active_theme.tree_dir}{item.label}/{reset}{suffix}"

    # File names line up with sibling directory names, past the marker column.
    indent = "  " * row.depth
    name_color = active_theme.tree_flattened if item.origin_folder is not None else file_color_for(item.label, active_theme)
    return f"{indent}  {name_color}{item.label}{reset}{suffix}"


def render_tree(root_name: str, rows: list[TreeRow], theme: UITheme | None = None) -> str:
    """Render the root header plus all rows as newline-terminated text."""
    active_theme = theme or DEFAULT_THEME
    header = f"{active_theme.tree_dir}{root_name}/{active_theme.reset}"
    lines = [header]
    lines.extend(format_tree_row(row, active_theme) for row in rows)
    return "\n".join(lines) + "\n"


__all__ = [
    "ROOT_KEY",
    "TreeRow",
    "expand_tree",
    "build_tree_rows",
    "file_color_for",
    "format_tree_row",
    "render_tree",
]
