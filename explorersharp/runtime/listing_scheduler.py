"""Background listing worker pool with refresh-generation filtering."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from ..explorer_model import NodeDescriptor

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ListingRequest:
    """One listing job for a node (``None`` is the workspace root)."""

    request_id: int
    generation: int
    node: NodeDescriptor | None


@dataclass(frozen=True)
class ListingResult:
    """Completed listing payload from a worker thread."""

    request: ListingRequest
    children: list[NodeDescriptor]


class ListingScheduler:
    """Runs independent listing calls concurrently.

    Requests are tagged with the generation current at submit time. Calling
    ``advance_generation`` (on refresh) makes every in-flight request stale;
    stale results are dropped by ``drain_results`` and ``collect``. Running
    calls are never cancelled and have no timeout.
    """

    def __init__(
        self,
        list_children: Callable[[NodeDescriptor | None], list[NodeDescriptor]],
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._list_children = list_children
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, max_workers),
            thread_name_prefix="explorersharp-listing",
        )
        self._lock = threading.Lock()
        self._finished_changed = threading.Condition(self._lock)
        self._generation = 0
        self._next_request_id = 1
        self._running: set[int] = set()
        self._finished: dict[int, ListingResult] = {}
        self._claimed: set[int] = set()

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def advance_generation(self, generation: int | None = None) -> int:
        """Mark all outstanding work stale; returns the new generation."""
        with self._lock:
            if generation is None:
                self._generation += 1
            else:
                self._generation = max(self._generation, int(generation))
            return self._generation

    def _run(self, request: ListingRequest) -> None:
        try:
            children = self._list_children(request.node)
        except Exception:
            logger.exception("Listing failed for %s", request.node)
            children = []
        with self._finished_changed:
            self._running.discard(request.request_id)
            self._finished[request.request_id] = ListingResult(request=request, children=children)
            self._finished_changed.notify_all()

    def schedule(self, node: NodeDescriptor | None) -> int:
        """Queue a listing for ``node`` and return its request id."""
        with self._lock:
            request = ListingRequest(
                request_id=self._next_request_id,
                generation=self._generation,
                node=node,
            )
            self._next_request_id += 1
            self._running.add(request.request_id)
        self._executor.submit(self._run, request)
        return request.request_id

    def _take_current(self, request_ids: Iterable[int]) -> list[ListingResult]:
        # Caller holds the lock.
        taken = [self._finished.pop(request_id) for request_id in request_ids]
        return [result for result in taken if result.request.generation == self._generation]

    def drain_results(self) -> list[ListingResult]:
        """Take finished results nobody is collecting, dropping stale ones."""
        with self._lock:
            ready = [request_id for request_id in self._finished if request_id not in self._claimed]
            return self._take_current(ready)

    def collect(self, request_ids: Iterable[int]) -> dict[int, ListingResult]:
        """Block until every request in ``request_ids`` finished.

        Returns current-generation results keyed by request id; stale ones are
        left out. Ids that are not outstanding (never scheduled, or already
        taken by an earlier call) are ignored. Claimed ids are invisible to
        ``drain_results`` while this call waits.
        """
        with self._finished_changed:
            wanted = {
                request_id
                for request_id in request_ids
                if (request_id in self._running or request_id in self._finished)
                and request_id not in self._claimed
            }
            self._claimed |= wanted
            try:
                self._finished_changed.wait_for(lambda: all(request_id in self._finished for request_id in wanted))
                results = self._take_current(sorted(wanted))
            finally:
                self._claimed -= wanted
        return {result.request.request_id: result for result in results}

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


__all__ = [
    "DEFAULT_MAX_WORKERS",
    "ListingRequest",
    "ListingResult",
    "ListingScheduler",
]
