from __future__ import annotations

"""Analytics configuration using Pydantic."""

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Thresholds for the progress report.

    - mastery_target: share of a type's questions answered correctly before
      the type counts as mastered (0..1)
    """

    mastery_target: float = Field(0.75, ge=0, le=1)
