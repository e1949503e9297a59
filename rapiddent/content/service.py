from __future__ import annotations

"""QuestionService: fetch and parse questions and scenarios.

Front ends call these methods instead of talking to a document source.
Fetch failures propagate as ServiceError subclasses; they never touch
progress state.
"""

import random
from typing import Iterable, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..errors import DataUnavailable, NoData
from ..exam.selection import RAPID_FIRE, select_exam_questions
from ..exam.session import EXAM_QUESTION_COUNT
from .document import Document
from .question import QuestionRecord, parse_questions
from .scenario import ScenarioRecord, parse_scenario, parse_scenarios
from .source import MAX_IDS_PER_QUERY, QUESTIONS, SCENARIOS, DocumentSource


class QuestionService:
    def __init__(
        self,
        source: DocumentSource,
        *,
        rapid_fire_type: str = RAPID_FIRE,
        batch_size: int = MAX_IDS_PER_QUERY,
    ) -> None:
        self.source = source
        self.rapid_fire_type = rapid_fire_type
        self.batch_size = max(1, min(int(batch_size), MAX_IDS_PER_QUERY))

    # Questions
    def fetch_questions(self, type_filter: Optional[str] = None) -> List[QuestionRecord]:
        if type_filter is None:
            docs = self.source.query(QUESTIONS)
        else:
            docs = self.source.query(QUESTIONS, "type", type_filter)
        questions = parse_questions(docs)
        xtrace("questions_fetched", {"type": type_filter, "docs": len(docs), "parsed": len(questions)})
        return questions

    def fetch_rapid_fire_questions(self) -> List[QuestionRecord]:
        return self.fetch_questions(self.rapid_fire_type)

    def fetch_questions_by_ids(self, ids: Iterable[str]) -> List[QuestionRecord]:
        """Look up questions by id in batches no larger than the source allows.

        All-or-nothing: if any batch fails, results from batches that already
        succeeded are discarded and a single DataUnavailable is raised.
        """
        wanted = sorted(set(ids))
        if not wanted:
            return []
        batches = [wanted[i:i + self.batch_size] for i in range(0, len(wanted), self.batch_size)]
        docs: List[Document] = []
        for n, batch in enumerate(batches, start=1):
            try:
                docs.extend(self.source.get_many(QUESTIONS, batch))
            except DataUnavailable as exc:
                xtrace("batch_failed", {"batch": n, "of": len(batches), "error": exc.message})
                raise DataUnavailable(f"Failed to load questions (batch {n} of {len(batches)}): {exc.message}") from exc
        questions = parse_questions(docs)
        xtrace("questions_by_ids", {"requested": len(wanted), "batches": len(batches), "parsed": len(questions)})
        return questions

    def fetch_exam_questions(
        self,
        count: int = EXAM_QUESTION_COUNT,
        rng: Optional[random.Random] = None,
    ) -> List[QuestionRecord]:
        pool = self.fetch_rapid_fire_questions()
        return select_exam_questions(pool, count, question_type=self.rapid_fire_type, rng=rng)

    # Scenarios
    def fetch_scenarios(self) -> List[ScenarioRecord]:
        scenarios = parse_scenarios(self.source.query(SCENARIOS))
        xtrace("scenarios_fetched", {"parsed": len(scenarios)})
        return scenarios

    def fetch_questions_for_scenario(self, scenario_id: str) -> List[QuestionRecord]:
        questions = parse_questions(self.source.query(QUESTIONS, "scenario_id", scenario_id))
        xtrace("scenario_questions", {"scenario": scenario_id, "parsed": len(questions)})
        return questions

    def fetch_random_scenario(
        self, rng: Optional[random.Random] = None
    ) -> Tuple[ScenarioRecord, List[QuestionRecord]]:
        """Pick one scenario at random and load its linked questions.

        Raises NoData when there are no scenarios and ParseFailure when the
        chosen scenario document is malformed.
        """
        rng = rng or random.Random()
        docs = self.source.query(SCENARIOS)
        if not docs:
            raise NoData("No scenarios found in the database.")
        scenario = parse_scenario(rng.choice(docs))
        return scenario, self.fetch_questions_for_scenario(scenario.id)
