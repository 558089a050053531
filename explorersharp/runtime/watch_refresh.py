"""Poll-based refresh triggering for workspace and settings changes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path


@dataclass
class WatchRefreshContext:
    tree_last_poll: float = 0.0
    tree_signature: str | None = None
    config_signature: str | None = None

    def maybe_refresh(
        self,
        root: Path,
        config_path: Path,
        refresh: Callable[[], object],
        *,
        build_tree_watch_signature: Callable[[Path], str],
        build_config_watch_signature: Callable[[Path], str],
        monotonic: Callable[[], float],
        poll_seconds: float,
    ) -> bool:
        """Call ``refresh`` when the tree or settings signature changed.

        The first poll only records signatures. Returns whether a refresh ran.
        """
        now = monotonic()
        if (now - self.tree_last_poll) < poll_seconds:
            return False
        self.tree_last_poll = now

        tree_signature = build_tree_watch_signature(root)
        config_signature = build_config_watch_signature(config_path)
        if self.tree_signature is None or self.config_signature is None:
            self.tree_signature = tree_signature
            self.config_signature = config_signature
            return False
        if tree_signature == self.tree_signature and config_signature == self.config_signature:
            return False

        self.tree_signature = tree_signature
        self.config_signature = config_signature
        refresh()
        return True
