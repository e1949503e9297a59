from __future__ import annotations

"""Explain Mode: one-line JSON traces at study-session milestones.

Turned on by ``--explain`` or ``explain: true`` in the config. Milestones
include progress load/save/reset, question fetches and batches, records
dropped by the parser, and exam start/answer/finish.
"""

import json
import sys
from typing import Any, Dict, Optional, TextIO

_ENABLED = False
_STREAM: Optional[TextIO] = None


def enable(flag: bool = True, *, stream: Optional[TextIO] = None) -> None:
    """Switch tracing on or off; ``stream`` defaults to stdout at write time."""
    global _ENABLED, _STREAM
    _ENABLED = bool(flag)
    _STREAM = stream


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    out = _STREAM or sys.stdout
    try:
        body = json.dumps(payload or {}, separators=(",", ":"), sort_keys=True, default=str)
    except (TypeError, ValueError):
        # unserialisable keys
        body = "{}"
    print(f"[EXPLAIN] {event} :: {body}", file=out)
