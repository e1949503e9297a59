from __future__ import annotations

"""Scenario drill: multiple-choice questions around one clinical vignette."""

from typing import Callable, Dict, List, Optional, Sequence

from ..content.question import QuestionRecord
from ..content.scenario import ScenarioRecord
from ..progress.store import ProgressStore
from .base_drill import BaseDrill, DrillResult, Feedback, inform_feedback, prompt_choice


def format_scenario(s: ScenarioRecord) -> str:
    return "\n".join(
        [
            f"{s.patient_name}, {s.age} y/o {s.gender}",
            f"Chief complaint: {s.chief_complaint}",
            f"Medical history: {s.medical_history}",
            f"Medications: {s.medications}",
            f"Allergies: {s.allergies}",
            f"Vitals: {s.vital_signs}",
            f"Clinical findings: {s.clinical_findings}",
        ]
    )


class ScenarioDrill(BaseDrill):
    def __init__(self, progress: ProgressStore, scenario: ScenarioRecord, questions: Sequence[QuestionRecord]) -> None:
        super().__init__(progress)
        self.scenario = scenario
        self.questions: List[QuestionRecord] = list(questions)
        self.index = 0
        self.selected: Optional[str] = None
        self.answered: Dict[int, Feedback] = {}

    @property
    def current(self) -> Optional[QuestionRecord]:
        if 0 <= self.index < len(self.questions):
            return self.questions[self.index]
        return None

    @property
    def finished(self) -> bool:
        return len(self.answered) >= len(self.questions)

    def select(self, option_id: str) -> bool:
        """Pick an option for the current question; locked once checked."""
        q = self.current
        if q is None or self.index in self.answered:
            return False
        if q.options and q.option(option_id) is None:
            raise ValueError(f"unknown option {option_id!r} for question {q.id}")
        self.selected = option_id
        return True

    def check(self) -> Optional[Feedback]:
        """Grade the selection. A question already checked keeps its first result."""
        if self.index in self.answered:
            return self.answered[self.index]
        q = self.current
        if q is None or self.selected is None:
            return None
        fb = self._record(q, self.grade(q, self.selected))
        self.answered[self.index] = fb
        return fb

    def next(self) -> bool:
        if self.index >= len(self.questions) - 1:
            return False
        self.index += 1
        self.selected = None
        return True

    def previous(self) -> bool:
        if self.index <= 0:
            return False
        self.index -= 1
        self.selected = None
        return True

    def run(self, ui_callbacks: Dict[str, Callable]) -> DrillResult:
        ask = ui_callbacks["ask"]
        inform = ui_callbacks["inform"]
        inform(format_scenario(self.scenario))
        inform("")
        total = len(self.questions)
        while self.current is not None:
            q = self.current
            inform(f"Question {self.index + 1}/{total}: {q.question_text}")
            if not q.options:
                inform("(no options for this question, skipping)")
                if not self.next():
                    break
                continue
            for opt in q.options:
                inform(f"  {opt.id}. {opt.text}")
            choices = {o.id.lower(): o.id for o in q.options}
            choices["q"] = "q"
            choice = prompt_choice(ask, "Your answer (q to quit): ", choices)
            if choice == "q":
                break
            self.select(choice)
            fb = self.check()
            if fb is not None:
                inform_feedback(inform, fb)
            if not self.next():
                break
        return self.result(len(self.answered))
