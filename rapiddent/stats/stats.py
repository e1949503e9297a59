from __future__ import annotations

"""Dashboard stats: aggregation over the progress store and formatting."""

from dataclasses import dataclass
from typing import List

from ..content.question import QuestionRecord
from ..content.service import QuestionService
from ..exam.session import ExamResult
from ..progress.store import ProgressStore


@dataclass(frozen=True)
class ProgressSummary:
    completed: int
    correct: int
    needs_review: int

    @property
    def accuracy(self) -> float:
        """Share of answered questions not flagged for review (0.0 when nothing answered)."""
        if self.completed <= 0:
            return 0.0
        return self.correct / self.completed


def summarize(progress: ProgressStore) -> ProgressSummary:
    return ProgressSummary(
        completed=progress.completed_count,
        correct=progress.correct_count,
        needs_review=progress.wrong_count,
    )


def format_summary(summary: ProgressSummary) -> str:
    """Return a human-readable summary of progress."""
    lines = [
        f"Questions completed: {summary.completed}",
        f"Correct answers:     {summary.correct}",
        f"Needs review:        {summary.needs_review}",
    ]
    if summary.completed:
        lines.append(f"Accuracy:            {summary.accuracy:.0%}")
    return "\n".join(lines)


def format_exam_result(result: ExamResult) -> str:
    lines = [
        f"Score: {result.score}/{result.total} ({result.percentage}%)",
        "PASSED" if result.passed else "NOT PASSED",
    ]
    if result.finish_reason == "timeout":
        lines.append("Time is up.")
    if result.wrong_questions:
        n = len(result.wrong_questions)
        lines.append(f"Review {n} incorrect answer{'' if n == 1 else 's'}:")
        for q in result.wrong_questions:
            lines.append(f"  - {q.question_text}")
    return "\n".join(lines)


def correct_questions(service: QuestionService, progress: ProgressStore) -> List[QuestionRecord]:
    """Questions currently answered correctly, sorted by question text."""
    ids = progress.correct_ids
    if not ids:
        return []
    return sorted(service.fetch_questions_by_ids(ids), key=lambda q: q.question_text)


def review_questions(service: QuestionService, progress: ProgressStore) -> List[QuestionRecord]:
    ids = progress.wrong_ids
    if not ids:
        return []
    return sorted(service.fetch_questions_by_ids(ids), key=lambda q: q.question_text)
