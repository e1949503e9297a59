from __future__ import annotations

"""Document sources: the collection-query surface the question service reads from.

A source answers two kinds of requests against a named collection:
an equality query on one field, and a lookup of up to 30 document ids.
Any failure to reach or read the backing data surfaces as DataUnavailable.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

import yaml

from ..app.explain import trace as xtrace
from ..errors import DataUnavailable
from .document import Document

QUESTIONS = "questions"
SCENARIOS = "scenarios"

MAX_IDS_PER_QUERY = 30


class DocumentSource(Protocol):
    def query(self, collection: str, field: Optional[str] = None, value: Any = None) -> List[Document]: ...

    def get_many(self, collection: str, ids: Iterable[str]) -> List[Document]: ...


class LocalDocumentSource:
    """Question bank stored as a YAML or JSON file.

    Layout:
        questions:
          q1: {question_text: ..., type: RAPID_FIRE, correct_option: A, explanation: ...}
        scenarios:
          s1: {patient_profile: {...}, clinical_notes: ...}

    The file is read lazily on first use and cached.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._collections: Optional[Dict[str, Dict[str, Any]]] = None

    def _read(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DataUnavailable(f"Question bank not found at '{self.path}'.") from exc
        try:
            if self.path.suffix.lower() == ".json":
                return json.loads(text)
            return yaml.safe_load(text) or {}
        except (ValueError, yaml.YAMLError) as exc:
            raise DataUnavailable(f"Question bank at '{self.path}' could not be read.") from exc

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if self._collections is not None:
            return self._collections
        raw = self._read()
        if not isinstance(raw, dict):
            raise DataUnavailable(f"Question bank at '{self.path}' is not a mapping of collections.")
        collections: Dict[str, Dict[str, Any]] = {}
        for name, docs in raw.items():
            if isinstance(docs, dict):
                collections[str(name)] = {str(k): v for k, v in docs.items()}
        self._collections = collections
        xtrace("bank_loaded", {"path": str(self.path), "collections": {k: len(v) for k, v in collections.items()}})
        return collections

    def query(self, collection: str, field: Optional[str] = None, value: Any = None) -> List[Document]:
        docs = self._load().get(collection, {})
        out: List[Document] = []
        for doc_id, data in docs.items():
            payload = data if isinstance(data, dict) else {}
            if field is not None and payload.get(field) != value:
                continue
            out.append(Document(id=doc_id, data=payload))
        return out

    def get_many(self, collection: str, ids: Iterable[str]) -> List[Document]:
        wanted = list(ids)
        if len(wanted) > MAX_IDS_PER_QUERY:
            raise ValueError(f"at most {MAX_IDS_PER_QUERY} ids per lookup, got {len(wanted)}")
        docs = self._load().get(collection, {})
        return [
            Document(id=doc_id, data=docs[doc_id] if isinstance(docs[doc_id], dict) else {})
            for doc_id in wanted
            if doc_id in docs
        ]
