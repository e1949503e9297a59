import random
import unittest

from rapiddent.progress.store import COMPLETED_KEY, WRONG_KEY, ProgressStore
from rapiddent.storage.kv import MemoryKeyValueStore


class ProgressStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.kv = MemoryKeyValueStore()
        self.store = ProgressStore(self.kv)

    def test_starts_empty(self) -> None:
        self.assertEqual(self.store.completed_count, 0)
        self.assertEqual(self.store.wrong_count, 0)
        self.assertEqual(self.store.correct_count, 0)

    def test_mark_correct(self) -> None:
        self.store.mark_answered("q1", True)
        self.assertTrue(self.store.is_completed("q1"))
        self.assertFalse(self.store.needs_review("q1"))
        self.assertEqual(self.store.completed_count, 1)
        self.assertEqual(self.store.wrong_count, 0)

    def test_mark_incorrect(self) -> None:
        self.store.mark_answered("q2", False)
        self.assertIn("q2", self.store.completed_ids)
        self.assertIn("q2", self.store.wrong_ids)
        self.assertEqual(self.store.wrong_count, 1)

    def test_correct_after_incorrect_clears_review_flag(self) -> None:
        self.store.mark_answered("q3", False)
        self.store.mark_answered("q3", False)
        self.store.mark_answered("q3", True)
        self.assertNotIn("q3", self.store.wrong_ids)
        self.assertIn("q3", self.store.completed_ids)

    def test_repeated_correct_marking_is_idempotent(self) -> None:
        self.store.mark_answered("q4", True)
        before = (self.store.completed_count, self.store.wrong_count)
        self.store.mark_answered("q4", True)
        self.assertEqual((self.store.completed_count, self.store.wrong_count), before)

    def test_mixed_answers_counts(self) -> None:
        for qid, ok in [("a", True), ("b", True), ("c", False), ("d", False), ("e", True)]:
            self.store.mark_answered(qid, ok)
        self.assertEqual(self.store.completed_count, 5)
        self.assertEqual(self.store.wrong_count, 2)
        self.assertEqual(self.store.correct_count, 3)
        self.assertEqual(self.store.correct_ids, frozenset({"a", "b", "e"}))

    def test_wrong_ids_always_subset_of_completed(self) -> None:
        rng = random.Random(7)
        ids = [f"q{i}" for i in range(12)]
        for _ in range(300):
            self.store.mark_answered(rng.choice(ids), rng.random() < 0.5)
            self.assertTrue(self.store.wrong_ids <= self.store.completed_ids)

    def test_reset_clears_everything(self) -> None:
        self.store.mark_answered("x", False)
        self.store.mark_answered("y", True)
        self.store.reset()
        self.assertEqual(self.store.completed_count, 0)
        self.assertEqual(self.store.wrong_count, 0)
        self.assertEqual(self.kv.get_string_array(COMPLETED_KEY), [])
        self.assertEqual(self.kv.get_string_array(WRONG_KEY), [])

    def test_every_mutation_is_written_through(self) -> None:
        self.store.mark_answered("p1", True)
        self.store.mark_answered("p2", False)
        self.assertEqual(self.kv.get_string_array(COMPLETED_KEY), ["p1", "p2"])
        self.assertEqual(self.kv.get_string_array(WRONG_KEY), ["p2"])

    def test_restores_from_storage(self) -> None:
        self.store.mark_answered("persist_1", True)
        self.store.mark_answered("persist_2", False)
        reloaded = ProgressStore(self.kv)
        self.assertEqual(reloaded.completed_ids, frozenset({"persist_1", "persist_2"}))
        self.assertEqual(reloaded.wrong_ids, frozenset({"persist_2"}))

    def test_malformed_storage_reads_as_empty(self) -> None:
        kv = MemoryKeyValueStore({COMPLETED_KEY: "not-a-list", WRONG_KEY: ["ok", 3]})
        store = ProgressStore(kv)
        self.assertEqual(store.completed_count, 0)
        self.assertEqual(store.wrong_count, 0)

    def test_load_repairs_wrong_ids_missing_from_completed(self) -> None:
        kv = MemoryKeyValueStore({COMPLETED_KEY: ["a"], WRONG_KEY: ["b"]})
        store = ProgressStore(kv)
        self.assertEqual(store.completed_ids, frozenset({"a", "b"}))
        self.assertTrue(store.wrong_ids <= store.completed_ids)

    def test_custom_keys(self) -> None:
        kv = MemoryKeyValueStore()
        store = ProgressStore(kv, completed_key="done", wrong_key="review")
        store.mark_answered("z", False)
        self.assertEqual(kv.get_string_array("done"), ["z"])
        self.assertEqual(kv.get_string_array("review"), ["z"])

    def test_subscribers_are_notified(self) -> None:
        seen = []
        unsubscribe = self.store.subscribe(lambda s: seen.append(s.completed_count))
        self.store.mark_answered("n1", True)
        self.store.reset()
        unsubscribe()
        self.store.mark_answered("n2", True)
        self.assertEqual(seen, [1, 0])

    def test_broken_subscriber_does_not_block_others(self) -> None:
        seen = []

        def broken(_store):
            raise RuntimeError("boom")

        self.store.subscribe(broken)
        self.store.subscribe(lambda s: seen.append(s.completed_count))
        self.store.mark_answered("q", True)
        self.assertEqual(seen, [1])


if __name__ == "__main__":
    unittest.main()
