from __future__ import annotations

"""Key-value persistence for string arrays.

Schema of the JSON file (v1):
{
  "schema": 1,
  "values": {
    "completedQuestionIDs": ["q1", "q2"],
    "wrongQuestionIDs": ["q2"]
  }
}

Notes:
- Reads are forgiving: a missing, unreadable or foreign file is treated as empty.
- Writes are best-effort; the caller never waits on or sees a write failure.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..app.explain import trace as xtrace

SCHEMA_VERSION = 1


class KeyValueStore(Protocol):
    def get_string_array(self, key: str) -> Optional[List[str]]: ...

    def set_string_array(self, key: str, values: List[str]) -> None: ...


def _as_string_array(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    if not all(isinstance(v, str) for v in value):
        return None
    return list(value)


class MemoryKeyValueStore:
    """Process-local store, used for tests and ``storage.backend: memory``."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(initial or {})

    def get_string_array(self, key: str) -> Optional[List[str]]:
        return _as_string_array(self._values.get(key))

    def set_string_array(self, key: str, values: List[str]) -> None:
        self._values[key] = list(values)


class JsonKeyValueStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"schema": SCHEMA_VERSION, "values": {}}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            xtrace("kv_unreadable", {"path": str(self.path), "error": repr(exc)})
            return {"schema": SCHEMA_VERSION, "values": {}}
        if not isinstance(data, dict) or data.get("schema") != SCHEMA_VERSION:
            return {"schema": SCHEMA_VERSION, "values": {}}
        if not isinstance(data.get("values"), dict):
            data["values"] = {}
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            # Best-effort; no error path for a failed write
            xtrace("kv_write_failed", {"path": str(self.path), "error": repr(exc)})

    def get_string_array(self, key: str) -> Optional[List[str]]:
        return _as_string_array(self._load()["values"].get(key))

    def set_string_array(self, key: str, values: List[str]) -> None:
        data = self._load()
        data["values"][key] = list(values)
        data["schema"] = SCHEMA_VERSION
        self._save(data)


def make_store(storage_cfg: Dict[str, Any]) -> KeyValueStore:
    """Build the configured key-value backend (``json`` or ``memory``)."""
    backend = str(storage_cfg.get("backend", "json"))
    if backend == "memory":
        return MemoryKeyValueStore()
    return JsonKeyValueStore(storage_cfg.get("path", "./progress.json"))
