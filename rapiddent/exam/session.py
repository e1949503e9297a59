from __future__ import annotations

"""Mock exam session: a timed, graded pass over a fixed question list.

State machine: NOT_STARTED -> IN_PROGRESS -> FINISHED (terminal). The exam
finishes when every question has been answered or the countdown hits zero,
whichever comes first. No per-question feedback is given and progress is
not recorded.
"""

import enum
import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..app.events import EventBus
from ..app.explain import trace as xtrace
from ..content.question import QuestionRecord

EXAM_QUESTION_COUNT = 30
EXAM_DURATION_S = 15 * 60
PASS_THRESHOLD = 75

FINISHED = "exam_finished"


class ExamState(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class ExamNotFinished(RuntimeError):
    pass


@dataclass(frozen=True)
class AnswerOutcome:
    question_id: str
    answered_option_id: str
    is_correct: bool
    answered_count: int
    finished: bool


@dataclass(frozen=True)
class ExamResult:
    score: int
    total: int
    wrong_questions: List[QuestionRecord] = field(default_factory=list)
    percentage: int = 0
    passed: bool = False
    finish_reason: Optional[str] = None
    remaining_seconds: int = 0


def percentage_of(score: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when there is nothing to score."""
    if total <= 0:
        return 0
    return int(math.floor(100.0 * score / total + 0.5))


class ExamSession:
    def __init__(
        self,
        questions: Sequence[QuestionRecord],
        *,
        duration_s: int = EXAM_DURATION_S,
        pass_threshold: int = PASS_THRESHOLD,
    ) -> None:
        self.questions: List[QuestionRecord] = list(questions)
        self.duration_s = int(duration_s)
        self.pass_threshold = int(pass_threshold)
        self.state = ExamState.NOT_STARTED
        self.answered_count = 0
        self.score = 0
        self.wrong_questions: List[QuestionRecord] = []
        self.remaining_seconds = self.duration_s
        self.finish_reason: Optional[str] = None
        self._bus = EventBus()

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def finished(self) -> bool:
        return self.state is ExamState.FINISHED

    @property
    def current_question(self) -> Optional[QuestionRecord]:
        if self.state is not ExamState.IN_PROGRESS or self.answered_count >= self.total:
            return None
        return self.questions[self.answered_count]

    def on_finished(self, handler: Callable[["ExamSession"], None]) -> Callable[[], None]:
        return self._bus.subscribe(FINISHED, handler)

    def start(self) -> None:
        if self.state is not ExamState.NOT_STARTED:
            return
        self.state = ExamState.IN_PROGRESS
        xtrace("exam_started", {"total": self.total, "duration_s": self.duration_s})
        if self.total == 0:
            self._finish("completed")

    def submit_answer(self, question: QuestionRecord, answered_option_id: str) -> Optional[AnswerOutcome]:
        """Grade the answer to the current question.

        A no-op returning None unless the exam is in progress and ``question``
        is the one currently on screen.
        """
        if self.state is not ExamState.IN_PROGRESS:
            return None
        current = self.current_question
        if current is None or question.id != current.id:
            xtrace("exam_answer_ignored", {"id": question.id, "expected": current.id if current else None})
            return None
        is_correct = answered_option_id == question.correct_option
        if is_correct:
            self.score += 1
        else:
            self.wrong_questions.append(question)
        self.answered_count += 1
        xtrace("exam_answer", {"id": question.id, "correct": is_correct, "score": self.score})
        if self.answered_count >= self.total:
            self._finish("completed")
        return AnswerOutcome(
            question_id=question.id,
            answered_option_id=answered_option_id,
            is_correct=is_correct,
            answered_count=self.answered_count,
            finished=self.finished,
        )

    def tick(self) -> None:
        if self.state is not ExamState.IN_PROGRESS:
            return
        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        if self.remaining_seconds == 0:
            self._finish("timeout")

    def finalize(self) -> ExamResult:
        if self.state is not ExamState.FINISHED:
            raise ExamNotFinished("exam results are only available once the exam has finished")
        pct = percentage_of(self.score, self.total)
        return ExamResult(
            score=self.score,
            total=self.total,
            wrong_questions=list(self.wrong_questions),
            percentage=pct,
            passed=pct >= self.pass_threshold,
            finish_reason=self.finish_reason,
            remaining_seconds=self.remaining_seconds,
        )

    def _finish(self, reason: str) -> None:
        self.state = ExamState.FINISHED
        self.finish_reason = reason
        xtrace("exam_finished", {"reason": reason, "score": self.score, "total": self.total})
        self._bus.emit(FINISHED, self)


def format_clock(seconds: int) -> str:
    """Render remaining time as M:SS."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"
