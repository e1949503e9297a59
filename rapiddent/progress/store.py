from __future__ import annotations

"""Progress store: which questions were answered, and which need review.

One instance is built per process by the session manager and handed
to whatever needs it. Every mutation is written through to the key-value
store and announced on the store's event bus.
"""

from typing import Callable, FrozenSet, Set

from ..app.events import EventBus
from ..app.explain import trace as xtrace
from ..storage.kv import KeyValueStore

COMPLETED_KEY = "completedQuestionIDs"
WRONG_KEY = "wrongQuestionIDs"

CHANGED = "progress_changed"


class ProgressStore:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        completed_key: str = COMPLETED_KEY,
        wrong_key: str = WRONG_KEY,
    ) -> None:
        self.kv = kv
        self.completed_key = completed_key
        self.wrong_key = wrong_key
        self._completed: Set[str] = set()
        self._wrong: Set[str] = set()
        self._bus = EventBus()
        self.load()

    # Persistence
    def load(self) -> None:
        """Restore both sets; absent or malformed values mean no prior progress."""
        self._completed = set(self.kv.get_string_array(self.completed_key) or [])
        self._wrong = set(self.kv.get_string_array(self.wrong_key) or [])
        # A flagged id was necessarily answered
        self._completed |= self._wrong
        xtrace("progress_loaded", {"completed": len(self._completed), "wrong": len(self._wrong)})
        self._bus.emit(CHANGED, self)

    def save(self) -> None:
        self.kv.set_string_array(self.completed_key, sorted(self._completed))
        self.kv.set_string_array(self.wrong_key, sorted(self._wrong))
        xtrace("progress_saved", {"completed": len(self._completed), "wrong": len(self._wrong)})

    # Mutations
    def mark_answered(self, question_id: str, correct: bool) -> None:
        """Record an attempt. A correct answer clears any earlier review flag."""
        self._completed.add(question_id)
        if correct:
            self._wrong.discard(question_id)
        else:
            self._wrong.add(question_id)
        xtrace("progress_marked", {"id": question_id, "correct": bool(correct)})
        self.save()
        self._bus.emit(CHANGED, self)

    def reset(self) -> None:
        self._completed.clear()
        self._wrong.clear()
        self.save()
        xtrace("progress_reset", {})
        self._bus.emit(CHANGED, self)

    # Observers
    def subscribe(self, handler: Callable[["ProgressStore"], None]) -> Callable[[], None]:
        return self._bus.subscribe(CHANGED, handler)

    # Queries
    @property
    def completed_ids(self) -> FrozenSet[str]:
        return frozenset(self._completed)

    @property
    def wrong_ids(self) -> FrozenSet[str]:
        return frozenset(self._wrong)

    @property
    def correct_ids(self) -> FrozenSet[str]:
        return frozenset(self._completed - self._wrong)

    @property
    def completed_count(self) -> int:
        return len(self._completed)

    @property
    def wrong_count(self) -> int:
        return len(self._wrong)

    @property
    def correct_count(self) -> int:
        return len(self._completed - self._wrong)

    def is_completed(self, question_id: str) -> bool:
        return question_id in self._completed

    def needs_review(self, question_id: str) -> bool:
        return question_id in self._wrong
