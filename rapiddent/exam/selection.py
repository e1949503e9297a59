from __future__ import annotations

"""Exam question selection: filter, shuffle, truncate."""

import random
from typing import List, Optional, Sequence

from ..app.explain import trace as xtrace
from ..content.question import QuestionRecord
from ..errors import InsufficientQuestions
from .session import EXAM_QUESTION_COUNT

RAPID_FIRE = "RAPID_FIRE"


def select_exam_questions(
    pool: Sequence[QuestionRecord],
    required: int = EXAM_QUESTION_COUNT,
    *,
    question_type: Optional[str] = RAPID_FIRE,
    rng: Optional[random.Random] = None,
) -> List[QuestionRecord]:
    """Pick exactly ``required`` questions of ``question_type`` in random order.

    Raises InsufficientQuestions rather than returning a short exam.
    """
    rng = rng or random.Random()
    eligible = [q for q in pool if question_type is None or q.type == question_type]
    if len(eligible) < required:
        xtrace("exam_pool_short", {"available": len(eligible), "required": required})
        raise InsufficientQuestions(available=len(eligible), required=required)
    rng.shuffle(eligible)
    return eligible[:required]
