from __future__ import annotations

"""Base drill abstractions and feedback/results models.

Practice drills grade an answer, show feedback, and record every attempt
in the progress store.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..app.explain import trace as xtrace
from ..content.question import QuestionRecord
from ..progress.store import ProgressStore


@dataclass(frozen=True)
class Feedback:
    """What the front end shows after an answer."""

    question_id: str
    is_correct: bool
    correct_option: str
    correct_text: str
    explanation: str


@dataclass
class DrillResult:
    """Aggregated result statistics for a drill run."""

    total: int
    correct: int
    wrong_ids: List[str] = field(default_factory=list)


def correct_answer_text(question: QuestionRecord) -> str:
    opt = question.option(question.correct_option)
    if opt is not None:
        return f"{opt.id}. {opt.text}"
    return "True" if question.is_correct_answer_true else "False"


class BaseDrill:
    """Abstract base for drills."""

    def __init__(self, progress: ProgressStore) -> None:
        self.progress = progress
        self.score = 0
        self._wrong_ids: List[str] = []

    def grade(self, question: QuestionRecord, answered_option_id: str) -> bool:
        return question.is_correct(answered_option_id)

    def _record(self, question: QuestionRecord, is_correct: bool) -> Feedback:
        if is_correct:
            self.score += 1
        else:
            self._wrong_ids.append(question.id)
        self.progress.mark_answered(question.id, is_correct)
        xtrace("graded", {"id": question.id, "correct": is_correct, "score": self.score})
        return Feedback(
            question_id=question.id,
            is_correct=is_correct,
            correct_option=question.correct_option,
            correct_text=correct_answer_text(question),
            explanation=question.explanation,
        )

    def result(self, total: int) -> DrillResult:
        return DrillResult(total=total, correct=self.score, wrong_ids=list(self._wrong_ids))

    def run(self, ui_callbacks: Dict[str, Callable]) -> DrillResult:
        raise NotImplementedError


def inform_feedback(inform: Callable[[str], None], fb: Feedback) -> None:
    if fb.is_correct:
        inform("Correct!")
    else:
        inform(f"Incorrect. Answer was {fb.correct_text}.")
    if fb.explanation:
        inform(fb.explanation)
    inform("")


def prompt_choice(ask: Callable[[str], str], prompt: str, choices: Dict[str, str]) -> Optional[str]:
    """Ask until the reply is one of ``choices`` (keys); returns the mapped value."""
    while True:
        ans = ask(prompt).strip().lower()
        if ans in choices:
            return choices[ans]
