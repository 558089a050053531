"""Runtime layer: settings persistence, explorer session, refresh plumbing."""

from __future__ import annotations

from .listing_scheduler import ListingResult, ListingScheduler
from .session import NO_HIDDEN_FOLDERS_MESSAGE, ExplorerSession
from .watch_refresh import WatchRefreshContext

__all__ = [
    "ExplorerSession",
    "NO_HIDDEN_FOLDERS_MESSAGE",
    "ListingScheduler",
    "ListingResult",
    "WatchRefreshContext",
]
