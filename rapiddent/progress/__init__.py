from .store import COMPLETED_KEY, WRONG_KEY, ProgressStore

__all__ = ["ProgressStore", "COMPLETED_KEY", "WRONG_KEY"]
