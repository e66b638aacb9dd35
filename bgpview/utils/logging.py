from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Callable, Dict


LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_ALIASES = {"WARNING": "WARN", "CRITICAL": "ERROR"}


def _threshold() -> int:
    """Minimum level from ``BGPVIEW_LOG_LEVEL``: a number or a level name.

    Unrecognised values fall back to INFO rather than silencing errors.
    """
    raw = os.getenv("BGPVIEW_LOG_LEVEL", "").strip()
    if not raw:
        return LEVELS["INFO"]
    if raw.isdigit():
        return int(raw)
    name = raw.upper()
    return LEVELS.get(_ALIASES.get(name, name), LEVELS["INFO"])


def _level_name(level: int) -> str:
    for name, value in LEVELS.items():
        if value == level:
            return name
    return str(level)


def _jsonable(ctx: Dict[str, Any]) -> Dict[str, Any]:
    # urls, exceptions and the like are logged by their str()
    out: Dict[str, Any] = {}
    for k, v in ctx.items():
        try:
            json.dumps(v)
            out[k] = v
        except (TypeError, ValueError):
            out[k] = str(v)
    return out


def logger(module: str, **bound: Any) -> Dict[str, Callable[..., None]]:
    """Return a JSON-lines logger keyed by level name.

    ``bound`` fields are added to every record; per-call fields win on
    conflict. The threshold is read on every call so tests and the CLI can
    change it after import.
    """

    def _emit(level: int, message: str, **ctx: Any) -> None:
        if level < _threshold():
            return
        record = {
            "ts": int(time.time() * 1000),
            "level": _level_name(level),
            "module": module,
            "message": message,
            **_jsonable({**bound, **ctx}),
        }
        sys.stdout.write(json.dumps(record) + "\n")
        sys.stdout.flush()

    return {name.lower(): (lambda msg, _lvl=value, **c: _emit(_lvl, msg, **c)) for name, value in LEVELS.items()}
