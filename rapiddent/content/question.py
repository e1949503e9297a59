from __future__ import annotations

"""Question records and the strict parse step at the document boundary.

A document either becomes a fully valid ``QuestionRecord`` or raises
``ParseFailure``; nothing partially valid reaches the core.
"""

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, ValidationError, field_validator, model_validator

from ..app.explain import trace as xtrace
from ..errors import ParseFailure
from .document import Document

TRUE_OPTION_ID = "A"
FALSE_OPTION_ID = "B"


def option_id_for(answered_true: bool) -> str:
    """Resolve a true/false swipe to the option id it stands for."""
    return TRUE_OPTION_ID if answered_true else FALSE_OPTION_ID


class QuestionOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    text: StrictStr
    is_correct: StrictBool


class QuestionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    question_text: StrictStr
    type: StrictStr
    correct_option: StrictStr
    explanation: StrictStr
    scenario_id: Optional[StrictStr] = None
    image_url: Optional[StrictStr] = None
    options: List[QuestionOption] = []

    @field_validator("options")
    @classmethod
    def _unique_option_ids(cls, v: List[QuestionOption]) -> List[QuestionOption]:
        ids = [o.id for o in v]
        if len(ids) != len(set(ids)):
            raise ValueError("option ids must be unique within a question")
        return v

    @model_validator(mode="after")
    def _correct_option_is_listed(self) -> "QuestionRecord":
        if self.options and self.correct_option not in {o.id for o in self.options}:
            raise ValueError(f"correct_option {self.correct_option!r} is not one of the options")
        return self

    @property
    def is_correct_answer_true(self) -> bool:
        return self.correct_option == TRUE_OPTION_ID

    def is_correct(self, answered_option_id: str) -> bool:
        return answered_option_id == self.correct_option

    def option(self, option_id: str) -> Optional[QuestionOption]:
        return next((o for o in self.options if o.id == option_id), None)


def _parse_options(doc: Document, raw_options: Any) -> List[QuestionOption]:
    if not isinstance(raw_options, list):
        xtrace("options_missing", {"doc": doc.id})
        return []
    options: List[QuestionOption] = []
    for raw in raw_options:
        try:
            options.append(QuestionOption.model_validate(raw))
        except ValidationError:
            xtrace("option_skipped", {"doc": doc.id, "option": raw})
    return options


def parse_question(doc: Document) -> QuestionRecord:
    """Parse one question document.

    ``correct_option`` is read directly when present; otherwise it is the id
    of the first option flagged ``is_correct``. Malformed options are
    skipped, but a document without a resolvable correct option fails.
    """
    data = doc.data if isinstance(doc.data, dict) else {}
    options = _parse_options(doc, data.get("options"))

    correct = data.get("correct_option")
    if not isinstance(correct, str):
        correct = next((o.id for o in options if o.is_correct), None)
    if correct is None:
        raise ParseFailure(f"Could not determine correct_option for document {doc.id}", document_id=doc.id)

    try:
        return QuestionRecord(
            id=doc.id,
            question_text=data.get("question_text"),
            type=data.get("type"),
            correct_option=correct,
            explanation=data.get("explanation"),
            scenario_id=data.get("scenario_id"),
            image_url=data.get("image_url"),
            options=options,
        )
    except ValidationError as exc:
        raise ParseFailure(f"Invalid question document {doc.id}: {exc.error_count()} error(s)", document_id=doc.id) from exc


def parse_questions(docs: Iterable[Document]) -> List[QuestionRecord]:
    """Parse a batch, dropping malformed documents instead of failing the batch."""
    out: List[QuestionRecord] = []
    for doc in docs:
        try:
            out.append(parse_question(doc))
        except ParseFailure as exc:
            xtrace("question_dropped", {"doc": doc.id, "reason": exc.message})
    return out
