from __future__ import annotations

"""Configuration loading and validation for RapidDent.

This module loads YAML configuration, layers a user file over the packaged
defaults, and validates enumerations and ranges before anything is built
from them.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

ALLOWED_BACKENDS = {"json", "memory"}
MAX_BATCH_SIZE = 30

DEFAULTS_PATH = Path(__file__).with_name("defaults.yml")


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as exc:
        print(f"ERROR: Config file is not valid YAML: {path} ({exc})", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"ERROR: Config file must contain a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML over the package defaults.

    Args:
        path: Optional path to a YAML config. If None, only defaults apply.

    Returns:
        A dictionary with configuration values.
    """
    cfg = _load_yaml(DEFAULTS_PATH)
    if path:
        cfg = _merge(cfg, _load_yaml(Path(path)))
    return cfg


def _as_int(section: Dict[str, Any], key: str, default: int, *, minimum: int = 0) -> int:
    value = section.get(key, default)
    try:
        value = int(value)
    except (TypeError, ValueError):
        print(f"WARNING: '{key}' must be an integer, using {default}.")
        return default
    if value < minimum:
        print(f"WARNING: '{key}' must be >= {minimum}, using {default}.")
        return default
    return value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated configuration dictionary.
    """
    cfg.setdefault("storage", {})
    cfg.setdefault("content", {})
    cfg.setdefault("exam", {})
    cfg.setdefault("explain", False)

    storage = cfg["storage"]
    content = cfg["content"]
    exam = cfg["exam"]

    storage.setdefault("backend", "json")
    storage.setdefault("path", "./rapiddent_progress.json")
    storage.setdefault("completed_key", "completedQuestionIDs")
    storage.setdefault("wrong_key", "wrongQuestionIDs")

    content.setdefault("source_path", "./question_bank.yml")
    content.setdefault("rapid_fire_type", "RAPID_FIRE")

    backend = storage.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported storage backend '{backend}', using 'json'.")
        storage["backend"] = "json"

    if storage["completed_key"] == storage["wrong_key"]:
        print("WARNING: completed_key and wrong_key must differ, using defaults.")
        storage["completed_key"] = "completedQuestionIDs"
        storage["wrong_key"] = "wrongQuestionIDs"

    batch = _as_int(content, "batch_size", MAX_BATCH_SIZE, minimum=1)
    if batch > MAX_BATCH_SIZE:
        print(f"WARNING: batch_size {batch} exceeds the lookup limit, using {MAX_BATCH_SIZE}.")
        batch = MAX_BATCH_SIZE
    content["batch_size"] = batch

    exam["question_count"] = _as_int(exam, "question_count", 30, minimum=1)
    exam["duration_s"] = _as_int(exam, "duration_s", 900, minimum=1)
    exam["warning_threshold_s"] = _as_int(exam, "warning_threshold_s", 60)
    threshold = _as_int(exam, "pass_threshold", 75)
    if threshold > 100:
        print("WARNING: pass_threshold is a percentage, using 75.")
        threshold = 75
    exam["pass_threshold"] = threshold

    cfg["explain"] = bool(cfg.get("explain", False))
    return cfg
