from __future__ import annotations

"""Clinical scenario records: a patient profile shared by linked questions."""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from ..app.explain import trace as xtrace
from ..errors import ParseFailure
from .document import Document


class ScenarioRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    patient_name: StrictStr = "Patient"
    age: StrictInt
    gender: StrictStr
    chief_complaint: StrictStr
    medical_history: StrictStr = "None"
    medications: StrictStr = "None"
    allergies: StrictStr = "None"
    clinical_findings: StrictStr
    vital_signs: StrictStr
    media_url: Optional[StrictStr] = None


def _joined(values: Any, sep: str) -> str:
    if not isinstance(values, list):
        return "None"
    items = [v for v in values if isinstance(v, str)]
    return sep.join(items) if items else "None"


def parse_scenario(doc: Document) -> ScenarioRecord:
    """Parse a scenario document.

    Vitals are looked up in ``patient_profile`` first, then at the root.
    """
    data = doc.data if isinstance(doc.data, dict) else {}
    profile = data.get("patient_profile")
    if not isinstance(profile, dict):
        raise ParseFailure(f"Missing patient_profile in scenario document {doc.id}", document_id=doc.id)

    vitals = profile.get("vitals")
    if not isinstance(vitals, str):
        vitals = data.get("vitals")

    fields: Dict[str, Any] = {
        "id": doc.id,
        "age": profile.get("age"),
        "gender": profile.get("gender"),
        "chief_complaint": profile.get("chief_complaint"),
        "medical_history": _joined(profile.get("med_history"), "\n"),
        "medications": _joined(profile.get("medications"), ", "),
        "allergies": _joined(profile.get("allergies"), ", "),
        "clinical_findings": data.get("clinical_notes"),
        "vital_signs": vitals,
        "media_url": data.get("media_url"),
    }
    try:
        return ScenarioRecord(**fields)
    except ValidationError as exc:
        raise ParseFailure(f"Invalid scenario document {doc.id}: {exc.error_count()} error(s)", document_id=doc.id) from exc


def parse_scenarios(docs: Iterable[Document]) -> List[ScenarioRecord]:
    out: List[ScenarioRecord] = []
    for doc in docs:
        try:
            out.append(parse_scenario(doc))
        except ParseFailure as exc:
            xtrace("scenario_dropped", {"doc": doc.id, "reason": exc.message})
    return out
