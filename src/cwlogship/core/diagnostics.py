"""
Internal diagnostics channel.

Emits one JSON object per line to stderr describing non-fatal conditions
(tolerated provisioning conflicts, dropped batches). Disabled unless
``core.internal_logging_enabled`` is set; the setting is read once and cached.
Diagnostics never raise into the caller.
"""

from __future__ import annotations

import sys
import time
from typing import Any, Callable

import orjson

Writer = Callable[[dict[str, Any]], None]

# Cached on first use; tests reset this to None between cases
_internal_logging_enabled: bool | None = None
_writer: Writer | None = None


def _default_writer(payload: dict[str, Any]) -> None:
    line = orjson.dumps(payload, default=str)
    sys.stderr.write(line.decode("utf-8") + "\n")
    sys.stderr.flush()


def is_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(Settings().core.internal_logging_enabled)
        except Exception:
            _internal_logging_enabled = False
    return _internal_logging_enabled


def set_writer_for_tests(writer: Writer | None) -> None:
    """Replace the output writer; ``None`` restores stderr."""
    global _writer
    _writer = writer


def _emit(level: str, component: str, message: str, fields: dict[str, Any]) -> None:
    if not is_enabled():
        return
    payload: dict[str, Any] = {
        "timestamp": time.time(),
        "level": level,
        "component": component,
        "message": message,
    }
    payload.update(fields)
    try:
        (_writer or _default_writer)(payload)
    except Exception:
        return None


def warn(component: str, message: str, **fields: Any) -> None:
    _emit("WARN", component, message, fields)


def debug(component: str, message: str, **fields: Any) -> None:
    _emit("DEBUG", component, message, fields)
