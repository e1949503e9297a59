import random
import unittest

from rapiddent.errors import InsufficientQuestions
from rapiddent.exam.selection import select_exam_questions

from tests.helpers import mcq_question, tf_question


class SelectionTests(unittest.TestCase):
    def test_short_pool_fails(self) -> None:
        pool = [tf_question(f"q{i}") for i in range(25)]
        with self.assertRaises(InsufficientQuestions) as ctx:
            select_exam_questions(pool, 30)
        self.assertEqual(ctx.exception.available, 25)
        self.assertEqual(ctx.exception.required, 30)
        self.assertIn("Need 30", ctx.exception.message)

    def test_takes_exactly_required_unique_questions(self) -> None:
        pool = [tf_question(f"q{i}") for i in range(50)]
        picked = select_exam_questions(pool, 30, rng=random.Random(1))
        self.assertEqual(len(picked), 30)
        self.assertEqual(len({q.id for q in picked}), 30)

    def test_filters_to_designated_type(self) -> None:
        pool = [tf_question(f"q{i}") for i in range(3)] + [mcq_question(f"m{i}") for i in range(5)]
        with self.assertRaises(InsufficientQuestions) as ctx:
            select_exam_questions(pool, 4)
        self.assertEqual(ctx.exception.available, 3)
        picked = select_exam_questions(pool, 3)
        self.assertTrue(all(q.type == "RAPID_FIRE" for q in picked))

    def test_seeded_selection_is_reproducible(self) -> None:
        pool = [tf_question(f"q{i}") for i in range(40)]
        a = select_exam_questions(pool, 30, rng=random.Random(42))
        b = select_exam_questions(pool, 30, rng=random.Random(42))
        self.assertEqual([q.id for q in a], [q.id for q in b])

    def test_does_not_reorder_callers_pool(self) -> None:
        pool = [tf_question(f"q{i}") for i in range(31)]
        ids = [q.id for q in pool]
        select_exam_questions(pool, 30, rng=random.Random(3))
        self.assertEqual([q.id for q in pool], ids)


if __name__ == "__main__":
    unittest.main()
