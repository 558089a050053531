from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from explorersharp import source_preview


class SourcePreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name)

    def test_sanitize_escapes_control_bytes_but_keeps_whitespace(self) -> None:
        text = "a\tb\r\nbell\x07esc\x1b[2J\x7f"

        sanitized = source_preview.sanitize_terminal_text(text)

        self.assertEqual(sanitized, "a\tb\r\nbell\\x07esc\\x1b[2J\\x7f")

    def test_sanitize_returns_clean_text_unchanged(self) -> None:
        text = "print('ok')\n"

        self.assertIs(source_preview.sanitize_terminal_text(text), text)

    def test_read_text_falls_back_to_latin1(self) -> None:
        path = self.base / "legacy.txt"
        path.write_bytes(b"caf\xe9\n")

        self.assertEqual(source_preview.read_text(path), "café\n")

    def test_colorize_python_emits_ansi(self) -> None:
        highlighted = source_preview.colorize_source("def f():\n    return 1\n", Path("demo.py"))

        self.assertIn("\033[", highlighted)
        self.assertIn("return", highlighted)

    def test_unknown_style_and_extension_still_render(self) -> None:
        highlighted = source_preview.colorize_source("plain words\n", Path("notes.unknownext"), style="nope")

        self.assertIn("plain words", highlighted)

    def test_render_file_without_color_is_sanitized_plain_text(self) -> None:
        path = self.base / "script.py"
        path.write_text("x = 1\x07\n", encoding="utf-8")

        self.assertEqual(source_preview.render_file(path, no_color=True), "x = 1\\x07\n")


if __name__ == "__main__":
    unittest.main()
