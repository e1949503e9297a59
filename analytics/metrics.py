from __future__ import annotations

"""Per-type aggregates for the progress report."""

import pandas as pd

from .config import AnalyticsConfig
from .prepare import STATUSES

COLUMNS = ["type", *STATUSES, "total", "mastery", "mastered"]


def breakdown_by_type(df: pd.DataFrame, cfg: AnalyticsConfig | None = None) -> pd.DataFrame:
    """Count statuses per question type and flag mastered types.

    Returns one row per type with columns:
    - correct, needs_review, unseen, total
    - mastery: float32 = correct / total
    - mastered: mastery >= cfg.mastery_target
    """
    cfg = cfg or AnalyticsConfig()
    if df.empty:
        return pd.DataFrame(columns=COLUMNS)
    table = df.groupby(["type", "status"], observed=True).size().unstack("status", fill_value=0)
    table.columns = table.columns.astype(str)
    table = table.reindex(columns=STATUSES, fill_value=0)
    table.columns.name = None
    table["total"] = table[STATUSES].sum(axis=1)
    # total >= 1 for every grouped type
    table["mastery"] = (table["correct"] / table["total"]).astype("float32")
    table["mastered"] = table["mastery"] >= float(cfg.mastery_target)
    return table.reset_index()[COLUMNS]
