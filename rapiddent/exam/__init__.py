from .session import AnswerOutcome, ExamNotFinished, ExamResult, ExamSession, ExamState
from .selection import select_exam_questions
from .ticker import ElapsedTicker, ExamController, ScheduledTicker, TickSource

__all__ = [
    "AnswerOutcome",
    "ExamNotFinished",
    "ExamResult",
    "ExamSession",
    "ExamState",
    "select_exam_questions",
    "ElapsedTicker",
    "ExamController",
    "ScheduledTicker",
    "TickSource",
]
