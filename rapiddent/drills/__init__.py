from .base_drill import BaseDrill, DrillResult, Feedback
from .rapid_fire import RapidFireDrill
from .scenario import ScenarioDrill

__all__ = ["BaseDrill", "DrillResult", "Feedback", "RapidFireDrill", "ScenarioDrill"]
