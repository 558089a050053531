"""Tree adapter and rendering tests for presented explorer nodes."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from explorersharp.explorer_model import NodeDescriptor
from explorersharp.runtime import ExplorerSession, ListingScheduler
from explorersharp.tree_view import (
    build_tree_rows,
    expand_tree,
    format_tree_row,
    render_tree,
    resolve_theme,
    to_tree_item,
)
from explorersharp.tree_view.adapter import (
    COLLAPSIBLE_COLLAPSED,
    COLLAPSIBLE_NONE,
    CONTEXT_FILE,
    CONTEXT_FLAT_FOLDER,
    CONTEXT_FOLDER,
    OPEN_FILE_COMMAND,
)


def _write(path: Path, text: str = "x\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TreeItemAdapterTests(unittest.TestCase):
    def test_directory_item_is_collapsible_without_command(self) -> None:
        node = NodeDescriptor(label="src", logical_path="src", storage_location=Path("/ws/src"), is_directory=True)

        item = to_tree_item(node)

        self.assertEqual(item.collapsible, COLLAPSIBLE_COLLAPSED)
        self.assertEqual(item.context_value, CONTEXT_FOLDER)
        self.assertEqual(item.tooltip, "src")
        self.assertIsNone(item.command)

    def test_file_item_carries_open_command(self) -> None:
        node = NodeDescriptor(
            label="a.py",
            logical_path="src/a.py",
            storage_location=Path("/ws/src/a.py"),
            is_directory=False,
        )

        item = to_tree_item(node)

        self.assertEqual(item.collapsible, COLLAPSIBLE_NONE)
        self.assertEqual(item.context_value, CONTEXT_FILE)
        assert item.command is not None
        self.assertEqual(item.command.command, OPEN_FILE_COMMAND)
        self.assertEqual(item.command.target, Path("/ws/src/a.py"))

    def test_flattened_item_exposes_origin_folder(self) -> None:
        node = NodeDescriptor(
            label="cfg/app.toml",
            logical_path="cfg/app.toml",
            storage_location=Path("/ws/cfg/app.toml"),
            is_directory=False,
            origin_folder="cfg",
            description="",
        )

        item = to_tree_item(node)

        self.assertEqual(item.context_value, CONTEXT_FLAT_FOLDER)
        self.assertEqual(item.origin_folder, "cfg")
        self.assertEqual(item.description, "")


class TreeRenderingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        base = Path(self._tmp.name).resolve()
        self.root = base / "proj"
        self.root.mkdir()
        self.session = ExplorerSession(self.root, config_path=base / "config.json")
        self.scheduler = ListingScheduler(self.session.list_children, max_workers=2)
        self.addCleanup(self.scheduler.shutdown)

    def test_full_expansion_renders_flattened_and_nested_rows(self) -> None:
        _write(self.root / "src" / "app.py")
        _write(self.root / "src" / "util.py")
        _write(self.root / "conf" / "deep" / "settings.toml")
        _write(self.root / "README.md")

        rows = build_tree_rows(expand_tree(self.scheduler))
        text = render_tree(self.root.name, rows, resolve_theme(None, no_color=True))

        self.assertEqual(
            text,
            "proj/\n"
            "  conf/deep/settings.toml\n"
            "▾ src/\n"
            "    app.py\n"
            "    util.py\n"
            "  README.md\n",
        )

    def test_depth_limit_leaves_directories_collapsed(self) -> None:
        _write(self.root / "pkg" / "a.py")
        _write(self.root / "pkg" / "b.py")

        rows = build_tree_rows(expand_tree(self.scheduler, max_depth=1))

        self.assertEqual(len(rows), 1)
        self.assertFalse(rows[0].expanded)
        self.assertEqual(format_tree_row(rows[0], resolve_theme(None, no_color=True)), "▸ pkg/")

    def test_colored_rows_include_ansi_sequences(self) -> None:
        _write(self.root / "main.py")

        rows = build_tree_rows(expand_tree(self.scheduler))

        self.assertIn("\033[", format_tree_row(rows[0], resolve_theme("ocean")))


if __name__ == "__main__":
    unittest.main()
