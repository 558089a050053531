"""Explorer session: listing, hide/unhide commands and refresh notification.

An ``ExplorerSession`` is bound to one workspace root. Every listing call
reads a fresh settings snapshot, so hide/unhide edits (made here or by
another process) show up on the next listing.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from ..explorer_model import ExplorerSettings, NodeDescriptor, list_children, relative_path
from ..sequence import linq
from ..source_preview import DEFAULT_STYLE, render_file
from . import config

logger = logging.getLogger(__name__)

NO_HIDDEN_FOLDERS_MESSAGE = "No hidden folders."

HideTarget = NodeDescriptor | Path | str | None


class ExplorerSession:
    """Workspace-bound explorer operations used by the CLI and watchers."""

    def __init__(self, root: Path, config_path: Path | None = None) -> None:
        self.root = root.resolve()
        self.config_path = config_path
        self._listeners: list[Callable[[int], None]] = []
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of refreshes issued so far."""
        with self._lock:
            return self._generation

    def settings(self) -> ExplorerSettings:
        return config.load_settings(self.root, self.config_path)

    def hidden_folders(self) -> list[str]:
        return config.load_hidden_folders(self.root, self.config_path)

    def list_children(self, node: NodeDescriptor | None = None) -> list[NodeDescriptor]:
        """List presented children of ``node``, or of the root when ``None``."""
        if node is not None and not node.is_directory:
            return []
        return self.list_location(None if node is None else node.storage_location)

    def list_location(self, location: Path | None) -> list[NodeDescriptor]:
        """List presented children of a directory path under the root."""
        return list_children(self.root, location, self.settings())

    # -- change notification --

    def subscribe(self, listener: Callable[[int], None]) -> Callable[[], None]:
        """Call ``listener(generation)`` on every refresh; returns an unsubscribe."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> int:
        """Start a new refresh generation and notify listeners."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            listeners = list(self._listeners)
        logger.debug("Refresh generation %d for %s", generation, self.root)
        for listener in listeners:
            listener(generation)
        return generation

    # -- hide / unhide --

    def resolve_target(self, target: HideTarget) -> str | None:
        """Map a node, filesystem path or relative string to a hide target.

        Flattened nodes resolve to their origin folder. ``Path`` values are
        made root-relative. Returns ``None`` when nothing usable remains.
        """
        if target is None:
            return None
        if isinstance(target, NodeDescriptor):
            resolved = target.hide_target
        elif isinstance(target, Path):
            candidate = target if target.is_absolute() else self.root / target
            try:
                candidate = candidate.resolve()
            except OSError:
                return None
            if candidate == self.root or not candidate.is_relative_to(self.root):
                return None
            resolved = relative_path(self.root, candidate)
        else:
            resolved = str(target).strip().strip("/")
        return resolved or None

    def hide_folder(self, target: HideTarget) -> bool:
        """Add ``target`` to the hidden list; returns whether anything changed."""
        folder = self.resolve_target(target)
        if folder is None:
            return False
        hidden = self.hidden_folders()
        if linq(hidden).contains(folder):
            return False
        hidden.append(folder)
        return self._save_hidden(hidden)

    def unhide_folder(
        self,
        target: HideTarget = None,
        pick: Callable[[list[str]], str | None] | None = None,
    ) -> str | None:
        """Remove a folder from the hidden list.

        With a resolvable ``target`` that folder is unhidden directly.
        Otherwise ``pick`` chooses among the hidden folders; when none are
        hidden the informational ``NO_HIDDEN_FOLDERS_MESSAGE`` is returned.
        """
        folder = self.resolve_target(target)
        if folder is not None:
            self._unhide(folder)
            return None

        hidden = self.hidden_folders()
        if not hidden:
            return NO_HIDDEN_FOLDERS_MESSAGE
        if pick is None:
            return None
        picked = pick(hidden)
        if picked:
            self._unhide(picked)
        return None

    def _unhide(self, folder: str) -> None:
        remaining = linq(self.hidden_folders()).where(lambda item: item != folder).to_list()
        self._save_hidden(remaining)

    def unhide_all(self) -> bool:
        return self._save_hidden([])

    def _save_hidden(self, hidden: list[str]) -> bool:
        # A failed write leaves the listing unchanged, so no refresh.
        if not config.save_hidden_folders(self.root, hidden, self.config_path):
            return False
        self.refresh()
        return True

    # -- open --

    def resolve_file(self, target: NodeDescriptor | Path | str) -> Path:
        if isinstance(target, NodeDescriptor):
            return target.storage_location
        path = Path(target)
        return path if path.is_absolute() else self.root / path

    def open_file(
        self,
        target: NodeDescriptor | Path | str,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
    ) -> str:
        """Return the printable content of a file node or path."""
        return render_file(self.resolve_file(target), style=style, no_color=no_color)


__all__ = [
    "ExplorerSession",
    "NO_HIDDEN_FOLDERS_MESSAGE",
]
