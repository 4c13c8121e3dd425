"""JSON-lines event log for CLI commands (opt-out).

Every record is checked against the packaged ``telemetry.schema.json``, which
also pins the event namespaces (``cli.*``, ``resource.*``,
``temp_directory.*``). Domain objects never write here; the CLI does.
"""

from __future__ import annotations

import json
import os
import threading
import time
from collections import Counter
from contextlib import contextmanager
from importlib import resources
from typing import Any, Iterable, Iterator

import jsonschema

from resourcefetcher.settings import RuntimeSettings

_DISABLE_VALUES = {"0", "false", "no", "off"}

_VALIDATOR: jsonschema.Draft202012Validator | None = None
_WRITE_LOCK = threading.Lock()


def telemetry_enabled() -> bool:
    return os.getenv("RESOURCEFETCHER_TELEMETRY", "1").lower() not in _DISABLE_VALUES


def record_structured_event(
    settings: RuntimeSettings,
    event: str,
    *,
    payload: dict[str, Any] | None = None,
    level: str = "info",
    status: str | None = None,
    component: str | None = None,
    duration_ms: float | None = None,
) -> None:
    if not telemetry_enabled():
        return
    record: dict[str, Any] = {"ts": time.time(), "event": event, "payload": payload or {}, "level": level}
    optional = {"status": status, "component": component, "durationMs": duration_ms}
    record.update({key: value for key, value in optional.items() if value is not None})
    _validator().validate(record)
    with _WRITE_LOCK:
        settings.telemetry_file.parent.mkdir(parents=True, exist_ok=True)
        with settings.telemetry_file.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")


@contextmanager
def track(settings: RuntimeSettings, event: str, *, component: str, payload: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Record ``start`` then ``success`` or ``error`` around the block.

    Keys added to the yielded dict are merged into the success payload.
    """

    record_structured_event(settings, event, status="start", component=component, payload=payload)
    start = time.perf_counter()
    outcome: dict[str, Any] = {}
    try:
        yield outcome
    except Exception as exc:
        record_structured_event(
            settings,
            event,
            status="error",
            level="error",
            component=component,
            duration_ms=(time.perf_counter() - start) * 1000,
            payload=payload | {"error": str(exc)},
        )
        raise
    record_structured_event(
        settings,
        event,
        status="success",
        component=component,
        duration_ms=(time.perf_counter() - start) * 1000,
        payload=payload | outcome,
    )


def iter_events(settings: RuntimeSettings) -> Iterator[dict[str, Any]]:
    if not settings.telemetry_file.exists():
        return
    with settings.telemetry_file.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def summarize(events: Iterable[dict[str, Any]]) -> dict[str, Any]:
    by_event: Counter[str] = Counter()
    by_status: Counter[str] = Counter()
    for evt in events:
        by_event[evt.get("event", "unknown")] += 1
        by_status[evt.get("status", "unknown")] += 1
    return {"total": sum(by_event.values()), "by_event": dict(by_event), "by_status": dict(by_status)}


def clear(settings: RuntimeSettings) -> None:
    with _WRITE_LOCK:
        settings.telemetry_file.unlink(missing_ok=True)


def _validator() -> jsonschema.Draft202012Validator:
    global _VALIDATOR
    if _VALIDATOR is None:
        schema_resource = resources.files("resourcefetcher.resources") / "telemetry.schema.json"
        _VALIDATOR = jsonschema.Draft202012Validator(json.loads(schema_resource.read_text(encoding="utf-8")))
    return _VALIDATOR
