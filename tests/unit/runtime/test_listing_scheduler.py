"""Tests for the concurrent listing scheduler."""

from __future__ import annotations

import threading
import time
import unittest
from pathlib import Path

from explorersharp.explorer_model import NodeDescriptor
from explorersharp.runtime import ListingScheduler


def _node(name: str) -> NodeDescriptor:
    return NodeDescriptor(label=name, logical_path=name, storage_location=Path("/ws") / name, is_directory=True)


def _wait_for_results(scheduler: ListingScheduler, *, expected_count: int, timeout_seconds: float = 1.0) -> list:
    deadline = time.monotonic() + timeout_seconds
    out: list = []
    while time.monotonic() < deadline:
        out.extend(scheduler.drain_results())
        if len(out) >= expected_count:
            break
        time.sleep(0.01)
    return out


class ListingSchedulerTests(unittest.TestCase):
    def test_collect_returns_results_keyed_by_request(self) -> None:
        def list_children(node: NodeDescriptor | None) -> list[NodeDescriptor]:
            parent = "root" if node is None else node.label
            return [_node(f"{parent}-child")]

        scheduler = ListingScheduler(list_children, max_workers=2)
        self.addCleanup(scheduler.shutdown)

        root_id = scheduler.schedule(None)
        src_id = scheduler.schedule(_node("src"))
        results = scheduler.collect([root_id, src_id])

        self.assertEqual(results[root_id].children[0].label, "root-child")
        self.assertEqual(results[src_id].children[0].label, "src-child")
        self.assertIsNone(results[root_id].request.node)

    def test_listings_run_concurrently(self) -> None:
        barrier = threading.Barrier(2, timeout=2.0)

        def list_children(node: NodeDescriptor | None) -> list[NodeDescriptor]:
            barrier.wait()
            return []

        scheduler = ListingScheduler(list_children, max_workers=2)
        self.addCleanup(scheduler.shutdown)

        ids = [scheduler.schedule(_node("a")), scheduler.schedule(_node("b"))]
        results = scheduler.collect(ids)

        self.assertEqual(set(results), set(ids))

    def test_results_from_previous_generation_are_discarded(self) -> None:
        release = threading.Event()

        def list_children(node: NodeDescriptor | None) -> list[NodeDescriptor]:
            release.wait(2.0)
            return [_node("child")]

        scheduler = ListingScheduler(list_children, max_workers=1)
        self.addCleanup(scheduler.shutdown)

        stale_id = scheduler.schedule(None)
        scheduler.advance_generation()
        release.set()
        fresh_id = scheduler.schedule(None)
        results = scheduler.collect([stale_id, fresh_id])

        self.assertNotIn(stale_id, results)
        self.assertIn(fresh_id, results)
        self.assertEqual(results[fresh_id].request.generation, 1)

    def test_drain_results_includes_unclaimed_current_results(self) -> None:
        scheduler = ListingScheduler(lambda node: [], max_workers=1)
        self.addCleanup(scheduler.shutdown)

        first_id = scheduler.schedule(None)
        second_id = scheduler.schedule(_node("x"))
        scheduler.collect([second_id])
        drained = _wait_for_results(scheduler, expected_count=1)

        self.assertEqual([result.request.request_id for result in drained], [first_id])

    def test_drain_does_not_take_results_a_collect_is_waiting_for(self) -> None:
        release = threading.Event()

        def list_children(node: NodeDescriptor | None) -> list[NodeDescriptor]:
            release.wait(2.0)
            return [_node("child")]

        scheduler = ListingScheduler(list_children, max_workers=1)
        self.addCleanup(scheduler.shutdown)
        request_id = scheduler.schedule(None)
        collected: dict = {}
        collector = threading.Thread(target=lambda: collected.update(scheduler.collect([request_id])))
        collector.start()
        deadline = time.monotonic() + 1.0
        while request_id not in scheduler._claimed and time.monotonic() < deadline:
            time.sleep(0.01)

        release.set()
        drained: list = []
        while collector.is_alive() and time.monotonic() < deadline + 1.0:
            drained.extend(scheduler.drain_results())
            time.sleep(0.005)
        collector.join(1.0)

        self.assertFalse(collector.is_alive())
        self.assertEqual(drained, [])
        self.assertIn(request_id, collected)

    def test_collect_ignores_ids_that_are_not_outstanding(self) -> None:
        scheduler = ListingScheduler(lambda node: [], max_workers=1)
        self.addCleanup(scheduler.shutdown)

        request_id = scheduler.schedule(None)
        first = scheduler.collect([request_id, 999])
        again = scheduler.collect([request_id])

        self.assertEqual(set(first), {request_id})
        self.assertEqual(again, {})

    def test_failing_listing_yields_empty_result(self) -> None:
        def list_children(node: NodeDescriptor | None) -> list[NodeDescriptor]:
            raise RuntimeError("boom")

        scheduler = ListingScheduler(list_children, max_workers=1)
        self.addCleanup(scheduler.shutdown)

        with self.assertLogs("explorersharp.runtime.listing_scheduler", level="ERROR"):
            request_id = scheduler.schedule(None)
            results = scheduler.collect([request_id])

        self.assertEqual(results[request_id].children, [])

    def test_advance_generation_accepts_external_generation(self) -> None:
        scheduler = ListingScheduler(lambda node: [], max_workers=1)
        self.addCleanup(scheduler.shutdown)

        self.assertEqual(scheduler.advance_generation(5), 5)
        self.assertEqual(scheduler.advance_generation(3), 5)
        self.assertEqual(scheduler.advance_generation(), 6)


if __name__ == "__main__":
    unittest.main()
