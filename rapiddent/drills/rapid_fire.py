from __future__ import annotations

"""Rapid-fire true/false drill with normal and review modes."""

import random
from typing import Callable, Dict, List, Optional, Sequence

from ..app.explain import trace as xtrace
from ..content.question import QuestionRecord, option_id_for
from ..errors import NoData
from ..progress.store import ProgressStore
from .base_drill import BaseDrill, DrillResult, Feedback, inform_feedback, prompt_choice


class RapidFireDrill(BaseDrill):
    def __init__(
        self,
        progress: ProgressStore,
        *,
        review_mode: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(progress)
        self.review_mode = review_mode
        self.rng = rng or random.Random()
        self.deck: List[QuestionRecord] = []
        self.index = 0

    def build_deck(self, questions: Sequence[QuestionRecord]) -> List[QuestionRecord]:
        """Choose and shuffle the cards for this run.

        Review mode keeps only questions that need review. Normal mode keeps
        unanswered questions, falling back to the whole set once everything
        has been answered.
        """
        if not questions:
            raise NoData("No RAPID_FIRE questions available.")
        if self.review_mode:
            deck = [q for q in questions if self.progress.needs_review(q.id)]
            if not deck:
                raise NoData("No questions need review. Great job!")
        else:
            deck = [q for q in questions if not self.progress.is_completed(q.id)]
            if not deck:
                deck = list(questions)
                xtrace("deck_all_completed", {"total": len(deck)})
        self.rng.shuffle(deck)
        self.deck = deck
        self.index = 0
        self.score = 0
        self._wrong_ids = []
        xtrace("deck_built", {"review": self.review_mode, "cards": len(deck), "pool": len(questions)})
        return deck

    @property
    def current(self) -> Optional[QuestionRecord]:
        if self.index < len(self.deck):
            return self.deck[self.index]
        return None

    @property
    def finished(self) -> bool:
        return self.index >= len(self.deck)

    def answer(self, answered_true: bool) -> Feedback:
        q = self.current
        if q is None:
            raise RuntimeError("deck is exhausted")
        return self._record(q, self.grade(q, option_id_for(answered_true)))

    def advance(self) -> None:
        if self.index < len(self.deck):
            self.index += 1

    def restart(self) -> None:
        """Reshuffle the same cards and start over with a fresh score."""
        self.rng.shuffle(self.deck)
        self.index = 0
        self.score = 0
        self._wrong_ids = []
        xtrace("deck_restarted", {"cards": len(self.deck)})

    def run(self, ui_callbacks: Dict[str, Callable]) -> DrillResult:
        ask = ui_callbacks["ask"]
        inform = ui_callbacks["inform"]
        total = len(self.deck)
        answered = 0
        while not self.finished:
            q = self.current
            assert q is not None
            inform(f"Card {self.index + 1}/{total}  [score {self.score}]")
            inform(q.question_text)
            choice = prompt_choice(ask, "True or false? (t/f, q to quit): ", {"t": "t", "f": "f", "q": "q"})
            if choice == "q":
                break
            inform_feedback(inform, self.answer(choice == "t"))
            answered += 1
            self.advance()
        return self.result(answered)
