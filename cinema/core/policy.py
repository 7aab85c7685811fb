from __future__ import annotations

import json
import logging
import os
from dataclasses import fields
from typing import Any, Dict, Mapping

from cinema import config
from cinema.core.models import SelectionPolicy

logger = logging.getLogger(__name__)

CONFIG_KEY = "cinemamode"

_POLICY_CACHE: Dict[str, Any] = {"path": None, "mtime": None, "policy": None}
_TRUE_TOKENS = {"1", "true", "yes", "on", "y"}
_FALSE_TOKENS = {"0", "false", "no", "off", "n", ""}


def _get_policy_path() -> str:
    env_path = os.getenv("CINEMA_MODE_CONFIG_PATH") or config.CINEMA_MODE_CONFIG_PATH
    if env_path:
        return env_path
    return os.path.join(os.getcwd(), "config", f"{CONFIG_KEY}.json")


def clear_policy_cache() -> None:
    global _POLICY_CACHE
    _POLICY_CACHE = {"path": None, "mtime": None, "policy": None}


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return default


def policy_from_mapping(raw: Mapping[str, Any] | None) -> SelectionPolicy:
    defaults = SelectionPolicy()
    if not raw:
        return defaults
    values: Dict[str, Any] = {}
    for policy_field in fields(SelectionPolicy):
        if policy_field.name not in raw:
            continue
        default = getattr(defaults, policy_field.name)
        value = raw[policy_field.name]
        if isinstance(default, bool):
            values[policy_field.name] = _coerce_bool(value, default)
        else:
            values[policy_field.name] = "" if value is None else str(value).strip()
    return SelectionPolicy(**values)


def load_policy() -> SelectionPolicy:
    """Return the current cinema-mode policy, re-reading the file when it changes."""
    path = _get_policy_path()
    global _POLICY_CACHE

    try:
        mtime = os.path.getmtime(path)
    except FileNotFoundError:
        if _POLICY_CACHE.get("path") != path:
            logger.info("Cinema mode config not found at %s; using defaults.", path)
        clear_policy_cache()
        _POLICY_CACHE["path"] = path
        _POLICY_CACHE["policy"] = SelectionPolicy()
        return _POLICY_CACHE["policy"]

    if (
        _POLICY_CACHE.get("path") == path
        and _POLICY_CACHE.get("mtime") == mtime
        and _POLICY_CACHE.get("policy") is not None
    ):
        return _POLICY_CACHE["policy"]  # type: ignore[return-value]

    try:
        with open(path, "r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        logger.warning("Failed to parse cinema mode config at %s. Ensure valid JSON.", path)
        raw = {}
    if not isinstance(raw, dict):
        logger.warning("Cinema mode config at %s must be a JSON object.", path)
        raw = {}

    policy = policy_from_mapping(raw)
    _POLICY_CACHE = {"path": path, "mtime": mtime, "policy": policy}
    return policy
