from __future__ import annotations

"""Session Manager: wires configuration, storage, content and sessions.

Built once at application start. Holds the single ProgressStore for the
process and hands it to every drill it creates; exam sessions never get it.
"""

import random
from pathlib import Path
from typing import Any, Dict, Optional

from ..content.service import QuestionService
from ..content.source import DocumentSource, LocalDocumentSource
from ..drills.rapid_fire import RapidFireDrill
from ..drills.scenario import ScenarioDrill
from ..exam.session import ExamSession
from ..exam.ticker import ExamController, TickSource
from ..progress.store import ProgressStore
from ..storage.kv import KeyValueStore, make_store
from ..util.randomness import make_rng
from .explain import trace as xtrace


class SessionManager:
    def __init__(
        self,
        cfg: Dict[str, Any],
        *,
        kv: Optional[KeyValueStore] = None,
        source: Optional[DocumentSource] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.cfg = cfg
        storage = cfg["storage"]
        content = cfg["content"]
        self.kv = kv if kv is not None else make_store(storage)
        self.progress = ProgressStore(
            self.kv,
            completed_key=storage["completed_key"],
            wrong_key=storage["wrong_key"],
        )
        self.source = source if source is not None else LocalDocumentSource(Path(content["source_path"]))
        self.service = QuestionService(
            self.source,
            rapid_fire_type=content["rapid_fire_type"],
            batch_size=content["batch_size"],
        )
        self.rng = rng or make_rng()

    def start_rapid_fire(self, *, review_mode: bool = False) -> RapidFireDrill:
        drill = RapidFireDrill(self.progress, review_mode=review_mode, rng=self.rng)
        drill.build_deck(self.service.fetch_rapid_fire_questions())
        xtrace("session_started", {"drill": "rapid_fire", "review": review_mode, "cards": len(drill.deck)})
        return drill

    def start_scenario(self) -> ScenarioDrill:
        scenario, questions = self.service.fetch_random_scenario(self.rng)
        xtrace("session_started", {"drill": "scenario", "scenario": scenario.id, "questions": len(questions)})
        return ScenarioDrill(self.progress, scenario, questions)

    def start_exam(self, ticker: TickSource) -> ExamController:
        """Select questions and start a timed exam driven by ``ticker``.

        InsufficientQuestions propagates before any session exists.
        """
        exam_cfg = self.cfg["exam"]
        questions = self.service.fetch_exam_questions(exam_cfg["question_count"], rng=self.rng)
        session = ExamSession(
            questions,
            duration_s=exam_cfg["duration_s"],
            pass_threshold=exam_cfg["pass_threshold"],
        )
        controller = ExamController(session, ticker)
        controller.start()
        return controller
