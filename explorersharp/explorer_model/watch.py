"""Filesystem and settings-change watch signatures.

Computes cheap hashes over workspace and config metadata for poll-based
refreshes. Runtime code compares these signatures to decide when the
presented tree must be listed again.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from .fs import is_dotfile

TREE_WATCH_MAX_DIRECTORIES = 5000


def _update_digest(digest, token: str) -> None:
    """Append a token plus separator byte to a hash digest."""
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _path_stat_signature(path: Path) -> tuple[str, int, int, int]:
    """Return a stable stat tuple describing ``path`` existence and metadata."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0, 0)
    except OSError:
        return ("error", 0, 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size, st.st_mode)


def build_tree_watch_signature(root: Path, max_directories: int = TREE_WATCH_MAX_DIRECTORIES) -> str:
    """Build a digest over every non-dot entry under ``root``.

    Any create, delete or modify below the workspace changes the digest. The
    walk stops after ``max_directories`` directories so huge trees stay cheap.
    """
    root = root.resolve()
    digest = hashlib.blake2b(digest_size=20)
    _update_digest(digest, f"root:{root}")

    pending: list[Path] = [root]
    visited = 0
    while pending and visited < max_directories:
        directory = pending.pop()
        visited += 1
        _update_digest(digest, f"dir:{directory}")

        children: list[tuple[str, bool, int, int, str]] = []
        try:
            with os.scandir(directory) as entries:
                for child in entries:
                    name = child.name
                    if is_dotfile(name):
                        continue
                    try:
                        is_dir = child.is_dir(follow_symlinks=False)
                    except OSError:
                        is_dir = False
                    try:
                        st = child.stat(follow_symlinks=False)
                        mtime_ns = st.st_mtime_ns
                        size = st.st_size
                        state = "ok"
                    except OSError:
                        mtime_ns = 0
                        size = 0
                        state = "error"
                    children.append((name, is_dir, mtime_ns, size, state))
        except OSError:
            _update_digest(digest, "children:error")
            continue

        children.sort(key=lambda item: (not item[1], item[0]))
        for name, is_dir, mtime_ns, size, state in children:
            _update_digest(digest, f"child:{name}:{1 if is_dir else 0}:{state}:{mtime_ns}:{size}")
            if is_dir:
                pending.append(directory / name)

    return digest.hexdigest()


def build_config_watch_signature(config_path: Path) -> str:
    """Build a digest over the settings file's stat metadata."""
    digest = hashlib.blake2b(digest_size=20)
    state, mtime_ns, size, mode = _path_stat_signature(config_path)
    _update_digest(digest, f"config:{config_path}:{state}:{mtime_ns}:{size}:{mode}")
    return digest.hexdigest()


__all__ = [
    "build_tree_watch_signature",
    "build_config_watch_signature",
]
