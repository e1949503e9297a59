import random
import unittest

from rapiddent.content.question import QuestionOption, QuestionRecord
from rapiddent.content.scenario import ScenarioRecord
from rapiddent.drills.rapid_fire import RapidFireDrill
from rapiddent.drills.scenario import ScenarioDrill
from rapiddent.errors import NoData
from rapiddent.progress.store import ProgressStore
from rapiddent.storage.kv import MemoryKeyValueStore

from tests.helpers import mcq_question, tf_question


def _scenario() -> ScenarioRecord:
    return ScenarioRecord(
        id="s1", age=50, gender="Female", chief_complaint="Swelling",
        clinical_findings="Fluctuant swelling", vital_signs="T 38.2",
    )


class RapidFireDrillTests(unittest.TestCase):
    def setUp(self) -> None:
        self.progress = ProgressStore(MemoryKeyValueStore())
        self.pool = [tf_question("q1", True), tf_question("q2", False), tf_question("q3", True)]

    def test_normal_mode_skips_completed(self) -> None:
        self.progress.mark_answered("q1", True)
        drill = RapidFireDrill(self.progress, rng=random.Random(0))
        deck = drill.build_deck(self.pool)
        self.assertEqual(sorted(q.id for q in deck), ["q2", "q3"])

    def test_normal_mode_shows_all_once_everything_completed(self) -> None:
        for q in self.pool:
            self.progress.mark_answered(q.id, True)
        deck = RapidFireDrill(self.progress).build_deck(self.pool)
        self.assertEqual(len(deck), 3)

    def test_review_mode_only_flagged(self) -> None:
        self.progress.mark_answered("q2", False)
        self.progress.mark_answered("q3", True)
        deck = RapidFireDrill(self.progress, review_mode=True).build_deck(self.pool)
        self.assertEqual([q.id for q in deck], ["q2"])

    def test_review_mode_with_nothing_to_review(self) -> None:
        with self.assertRaises(NoData):
            RapidFireDrill(self.progress, review_mode=True).build_deck(self.pool)

    def test_empty_pool(self) -> None:
        with self.assertRaises(NoData):
            RapidFireDrill(self.progress).build_deck([])

    def test_answer_scores_and_records(self) -> None:
        drill = RapidFireDrill(self.progress)
        drill.build_deck([tf_question("q2", False)])
        fb = drill.answer(answered_true=False)
        self.assertTrue(fb.is_correct)
        self.assertEqual(fb.correct_text, "False")
        self.assertEqual(drill.score, 1)
        self.assertTrue(self.progress.is_completed("q2"))
        self.assertFalse(self.progress.needs_review("q2"))

    def test_wrong_answer_flags_review(self) -> None:
        drill = RapidFireDrill(self.progress)
        drill.build_deck([tf_question("q1", True)])
        fb = drill.answer(answered_true=False)
        self.assertFalse(fb.is_correct)
        self.assertEqual(fb.explanation, "Because of q1.")
        self.assertTrue(self.progress.needs_review("q1"))

    def test_review_correct_answer_clears_flag(self) -> None:
        self.progress.mark_answered("q1", False)
        drill = RapidFireDrill(self.progress, review_mode=True)
        drill.build_deck(self.pool)
        drill.answer(answered_true=True)
        self.assertEqual(self.progress.wrong_count, 0)

    def test_advance_until_finished(self) -> None:
        drill = RapidFireDrill(self.progress)
        drill.build_deck(self.pool)
        for _ in range(3):
            drill.answer(True)
            drill.advance()
        self.assertTrue(drill.finished)
        self.assertIsNone(drill.current)
        with self.assertRaises(RuntimeError):
            drill.answer(True)

    def test_restart_keeps_cards_and_clears_score(self) -> None:
        drill = RapidFireDrill(self.progress, rng=random.Random(3))
        drill.build_deck(self.pool)
        drill.answer(True)
        drill.advance()
        drill.restart()
        self.assertEqual((drill.index, drill.score), (0, 0))
        self.assertEqual(sorted(q.id for q in drill.deck), ["q1", "q2", "q3"])
        self.assertEqual(drill.result(0).wrong_ids, [])

    def test_run_loop_with_scripted_ui(self) -> None:
        drill = RapidFireDrill(self.progress)
        drill.build_deck([tf_question("q1", True)])
        replies = iter(["maybe", "t"])
        out = []
        result = drill.run({"ask": lambda _p: next(replies), "inform": out.append})
        self.assertEqual((result.total, result.correct), (1, 1))
        self.assertIn("Correct!", out)

    def test_run_loop_quit(self) -> None:
        drill = RapidFireDrill(self.progress)
        drill.build_deck(self.pool)
        result = drill.run({"ask": lambda _p: "q", "inform": lambda _m: None})
        self.assertEqual(result.total, 0)
        self.assertEqual(self.progress.completed_count, 0)


class ScenarioDrillTests(unittest.TestCase):
    def setUp(self) -> None:
        self.progress = ProgressStore(MemoryKeyValueStore())
        self.questions = [mcq_question("m1", "B", "s1"), mcq_question("m2", "D", "s1")]
        self.drill = ScenarioDrill(self.progress, _scenario(), self.questions)

    def test_check_requires_selection(self) -> None:
        self.assertIsNone(self.drill.check())
        self.assertEqual(self.progress.completed_count, 0)

    def test_correct_selection(self) -> None:
        self.assertTrue(self.drill.select("B"))
        fb = self.drill.check()
        self.assertTrue(fb.is_correct)
        self.assertEqual(fb.correct_text, "B. Option B")
        self.assertEqual(self.drill.score, 1)
        self.assertTrue(self.progress.is_completed("m1"))

    def test_checked_question_is_locked(self) -> None:
        self.drill.select("A")
        first = self.drill.check()
        self.assertFalse(self.drill.select("B"))
        self.assertIs(self.drill.check(), first)
        self.assertEqual(self.drill.score, 0)
        self.assertTrue(self.progress.needs_review("m1"))

    def test_unknown_option(self) -> None:
        with self.assertRaises(ValueError):
            self.drill.select("Z")

    def test_navigation_clears_selection(self) -> None:
        self.drill.select("A")
        self.assertTrue(self.drill.next())
        self.assertIsNone(self.drill.selected)
        self.assertFalse(self.drill.next())
        self.assertTrue(self.drill.previous())
        self.assertFalse(self.drill.previous())

    def test_finished_after_all_checked(self) -> None:
        self.drill.select("B")
        self.drill.check()
        self.drill.next()
        self.drill.select("D")
        self.drill.check()
        self.assertTrue(self.drill.finished)
        self.assertEqual(self.drill.result(2).correct, 2)

    def test_run_loop(self) -> None:
        replies = iter(["b", "a"])
        result = self.drill.run({"ask": lambda _p: next(replies), "inform": lambda _m: None})
        self.assertEqual((result.total, result.correct), (2, 1))
        self.assertEqual(result.wrong_ids, ["m2"])


class OptionIdMatchingTests(unittest.TestCase):
    def test_lowercase_option_ids_grade_exactly(self) -> None:
        progress = ProgressStore(MemoryKeyValueStore())
        question = QuestionRecord(
            id="lc1",
            question_text="Which option?",
            type="SCENARIO",
            correct_option="b",
            explanation="",
            scenario_id="s1",
            options=[QuestionOption(id=o, text=f"Option {o}", is_correct=(o == "b")) for o in "abcd"],
        )
        drill = ScenarioDrill(progress, _scenario(), [question])
        self.assertTrue(drill.select("b"))
        fb = drill.check()
        self.assertTrue(fb.is_correct)
        self.assertEqual(fb.correct_text, "b. Option b")
        self.assertTrue(progress.is_completed("lc1"))
        self.assertFalse(progress.needs_review("lc1"))

    def test_lowercase_reply_through_run_loop(self) -> None:
        progress = ProgressStore(MemoryKeyValueStore())
        question = QuestionRecord(
            id="lc2", question_text="Pick", type="SCENARIO", correct_option="c", explanation="",
            options=[QuestionOption(id=o, text=o, is_correct=(o == "c")) for o in "abc"],
        )
        drill = ScenarioDrill(progress, _scenario(), [question])
        result = drill.run({"ask": lambda _p: "C", "inform": lambda _m: None})
        self.assertEqual(result.correct, 1)
        self.assertEqual(progress.wrong_count, 0)


if __name__ == "__main__":
    unittest.main()
