from __future__ import annotations

"""Loosely-typed documents as returned by a document source."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Document:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)
