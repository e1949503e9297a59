"""RapidDent package initialization.

Domain core for dental-exam study: progress tracking across practice
attempts, a timed mock exam, and the content/provider layer around them.
"""

from __future__ import annotations

from .errors import DataUnavailable, InsufficientQuestions, NoData, ParseFailure, ServiceError
from .content.question import QuestionOption, QuestionRecord
from .content.scenario import ScenarioRecord
from .progress.store import ProgressStore
from .exam.session import ExamResult, ExamSession, ExamState

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ServiceError",
    "DataUnavailable",
    "NoData",
    "ParseFailure",
    "InsufficientQuestions",
    "QuestionOption",
    "QuestionRecord",
    "ScenarioRecord",
    "ProgressStore",
    "ExamSession",
    "ExamState",
    "ExamResult",
]
