from __future__ import annotations

"""Join question records with progress into one row per question."""

from typing import Iterable

import pandas as pd
from pandas.api.types import CategoricalDtype

from rapiddent.content.question import QuestionRecord
from rapiddent.progress.store import ProgressStore

STATUSES = ["correct", "needs_review", "unseen"]
STATUS_DTYPE = CategoricalDtype(categories=STATUSES, ordered=True)

DTYPES = {
    "id": "string",
    "type": "string",
    "scenario_id": "string",
    "status": STATUS_DTYPE,
}


def _status(question_id: str, progress: ProgressStore) -> str:
    if progress.needs_review(question_id):
        return "needs_review"
    if progress.is_completed(question_id):
        return "correct"
    return "unseen"


def progress_frame(questions: Iterable[QuestionRecord], progress: ProgressStore) -> pd.DataFrame:
    """Build a DataFrame with columns id, type, scenario_id, status.

    Ids the store knows about but the question list lacks are not included.
    """
    rows = [
        {"id": q.id, "type": q.type, "scenario_id": q.scenario_id, "status": _status(q.id, progress)}
        for q in questions
    ]
    df = pd.DataFrame(rows, columns=list(DTYPES.keys()))
    return df.astype(DTYPES).sort_values("id", kind="stable").reset_index(drop=True)
