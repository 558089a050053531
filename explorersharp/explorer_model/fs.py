"""Filesystem reads and ordering helpers for explorer listings."""

from __future__ import annotations

import os
import unicodedata
from pathlib import Path

from ..sequence import linq
from .types import DirectoryEntry

HIDDEN_NAME_PREFIX = "."


def is_dotfile(name: str) -> bool:
    """Return whether ``name`` is a dot-prefixed entry, always excluded."""
    return name.startswith(HIDDEN_NAME_PREFIX)


def relative_path(root: Path, path: Path) -> str:
    """Return ``path`` relative to ``root`` as a ``/``-separated string.

    Paths outside ``root`` are returned unchanged in posix form.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _char_class(ch: str) -> int:
    # Spaces, punctuation and symbols < digits < letters.
    category = unicodedata.category(ch)
    if category[0] in "ZPSC":
        return 0
    if category[0] == "N":
        return 1
    return 2


def collation_key(name: str) -> tuple:
    """Sort key approximating root-locale collation.

    Levels, compared in order: base characters without accents and case,
    then accents, then case with lowercase first, then raw code points so
    that distinct names never tie.
    """
    decomposed = unicodedata.normalize("NFD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    primary = tuple((_char_class(ch), ch) for ch in base.casefold())
    accents = tuple(ord(ch) if unicodedata.combining(ch) else 0 for ch in decomposed)
    case = tuple(ch.isupper() for ch in base)
    return (primary, accents, case, name)


def locale_compare(a: str, b: str) -> int:
    """Case-sensitive, locale-style three-way name compare.

    Accents are secondary to the base letters (``éclair < fig``), punctuation
    sorts before digits and digits before letters, and names equal apart from
    case put lowercase first (``a < A < b < B``). Only identical names tie.
    """
    key_a = collation_key(a)
    key_b = collation_key(b)
    if key_a == key_b:
        return 0
    return -1 if key_a < key_b else 1


def read_directory_entries(directory: Path) -> tuple[list[DirectoryEntry], OSError | None]:
    """Read raw children of ``directory`` in filesystem order.

    Returns ``(entries, read_error)``; ``read_error`` is set and ``entries`` is
    empty when the directory cannot be scanned.
    """
    entries: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as scanned:
            for child in scanned:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                entries.append(DirectoryEntry(name=child.name, path=Path(child.path), is_dir=is_dir))
    except OSError as exc:
        return [], exc
    return entries, None


def sort_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Directories first, then names ascending by ``locale_compare``; stable."""
    return (
        linq(entries)
        .order_by(lambda entry: 0 if entry.is_dir else 1)
        .then_by(lambda entry: entry.name, locale_compare)
        .to_list()
    )


__all__ = [
    "HIDDEN_NAME_PREFIX",
    "is_dotfile",
    "relative_path",
    "collation_key",
    "locale_compare",
    "read_directory_entries",
    "sort_entries",
]
