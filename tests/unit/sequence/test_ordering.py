"""Stable multi-key ordering tests for ``order_by``/``then_by`` chains."""

from __future__ import annotations

import random
import unittest

from explorersharp.sequence import OrderedSequence, linq


class OrderingTests(unittest.TestCase):
    def test_order_by_is_stable_for_equal_keys(self) -> None:
        items = [("b", 1), ("a", 1), ("c", 0), ("d", 1)]

        result = linq(items).order_by(lambda item: item[1]).to_list()

        self.assertEqual(result, [("c", 0), ("b", 1), ("a", 1), ("d", 1)])

    def test_then_by_breaks_ties_in_declaration_order(self) -> None:
        items = [
            {"rank": 1, "name": "b", "size": 2},
            {"rank": 0, "name": "z", "size": 1},
            {"rank": 1, "name": "a", "size": 5},
            {"rank": 1, "name": "a", "size": 3},
        ]

        result = (
            linq(items)
            .order_by(lambda item: item["rank"])
            .then_by(lambda item: item["name"])
            .then_by(lambda item: item["size"])
            .to_list()
        )

        self.assertEqual(
            [(item["rank"], item["name"], item["size"]) for item in result],
            [(0, "z", 1), (1, "a", 3), (1, "a", 5), (1, "b", 2)],
        )

    def test_full_ties_keep_input_order(self) -> None:
        items = [("x", index) for index in range(10)]

        result = linq(items).order_by(lambda item: item[0]).then_by(lambda item: item[0]).to_list()

        self.assertEqual(result, items)

    def test_descending_variants(self) -> None:
        items = [(1, "a"), (2, "b"), (1, "c")]

        by_number_desc = linq(items).order_by_descending(lambda item: item[0]).to_list()
        then_desc = linq(items).order_by(lambda item: item[0]).then_by_descending(lambda item: item[1]).to_list()

        self.assertEqual(by_number_desc, [(2, "b"), (1, "a"), (1, "c")])
        self.assertEqual(then_desc, [(1, "c"), (1, "a"), (2, "b")])

    def test_custom_comparator_is_used(self) -> None:
        def by_length(a: str, b: str) -> int:
            return len(a) - len(b)

        result = linq(["ccc", "a", "bb"]).order_by(lambda item: item, by_length).to_list()

        self.assertEqual(result, ["a", "bb", "ccc"])

    def test_then_by_returns_new_sequence_and_leaves_original_unchanged(self) -> None:
        base = linq([(1, "b"), (1, "a")]).order_by(lambda item: item[0])
        refined = base.then_by(lambda item: item[1])

        self.assertIsInstance(refined, OrderedSequence)
        self.assertEqual(base.to_list(), [(1, "b"), (1, "a")])
        self.assertEqual(refined.to_list(), [(1, "a"), (1, "b")])

    def test_result_is_independent_of_input_permutation(self) -> None:
        items = [(rank, name) for rank in (0, 1) for name in ("a", "b", "c", "d")]
        expected = linq(items).order_by(lambda item: item[0]).then_by(lambda item: item[1]).to_list()
        rng = random.Random(7)

        for _ in range(20):
            shuffled = list(items)
            rng.shuffle(shuffled)
            result = linq(shuffled).order_by(lambda item: item[0]).then_by(lambda item: item[1]).to_list()
            self.assertEqual(result, expected)

    def test_ordering_is_lazy_over_mutable_source(self) -> None:
        source = [3, 1]
        ordered = linq(source).order_by(lambda item: item)
        source.append(2)

        self.assertEqual(ordered.to_list(), [1, 2, 3])


if __name__ == "__main__":
    unittest.main()
