from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from rapiddent.content.document import Document
from rapiddent.content.question import QuestionOption, QuestionRecord
from rapiddent.errors import DataUnavailable


def tf_question(qid: str, answer_true: bool = True, qtype: str = "RAPID_FIRE") -> QuestionRecord:
    return QuestionRecord(
        id=qid,
        question_text=f"Statement {qid}",
        type=qtype,
        correct_option="A" if answer_true else "B",
        explanation=f"Because of {qid}.",
    )


def mcq_question(qid: str, correct: str = "B", scenario_id: Optional[str] = None) -> QuestionRecord:
    return QuestionRecord(
        id=qid,
        question_text=f"Which option for {qid}?",
        type="SCENARIO",
        correct_option=correct,
        explanation="",
        scenario_id=scenario_id,
        options=[QuestionOption(id=o, text=f"Option {o}", is_correct=(o == correct)) for o in "ABCD"],
    )


def question_doc(qid: str, **overrides: Any) -> Document:
    data: Dict[str, Any] = {
        "question_text": f"Statement {qid}",
        "type": "RAPID_FIRE",
        "correct_option": "A",
        "explanation": "Because.",
    }
    data.update(overrides)
    return Document(id=qid, data=data)


class FakeSource:
    """In-memory document source that records lookups and can fail on demand."""

    def __init__(self, questions: Optional[Dict[str, Dict[str, Any]]] = None,
                 scenarios: Optional[Dict[str, Dict[str, Any]]] = None,
                 fail_on_call: Optional[int] = None) -> None:
        self.collections = {"questions": dict(questions or {}), "scenarios": dict(scenarios or {})}
        self.fail_on_call = fail_on_call
        self.get_many_calls: List[List[str]] = []

    def query(self, collection: str, field: Optional[str] = None, value: Any = None) -> List[Document]:
        docs = self.collections.get(collection, {})
        return [
            Document(id=k, data=v)
            for k, v in docs.items()
            if field is None or v.get(field) == value
        ]

    def get_many(self, collection: str, ids: Iterable[str]) -> List[Document]:
        ids = list(ids)
        self.get_many_calls.append(ids)
        if self.fail_on_call is not None and len(self.get_many_calls) == self.fail_on_call:
            raise DataUnavailable("backend unreachable")
        docs = self.collections.get(collection, {})
        return [Document(id=i, data=docs[i]) for i in ids if i in docs]
