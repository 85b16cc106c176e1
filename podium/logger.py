"""
Event logging: append events to logs/events.jsonl and read them back.

================================================================================
HOW THIS SCRIPT WORKS (for studying)
================================================================================

Everything worth remembering about a rehearsal (session start/stop, filler
words, stutters, silences, stress and relaxation, the final evaluation) is
written as one JSON object per line in logs/events.jsonl. The Report and
History tabs read this file for the timeline and the CSV transcript.

  EVENT RECORD SHAPE:
  Every record has: timestamp (ISO UTC), type, mode, phase, plus whatever
  extra fields were in the payload (e.g. filler, count, bpm, overall_score).
  - type: "SESSION_START" | "SESSION_STOP" | "FILLER_WORD" | "STUTTER" |
          "SILENCE" | "CONTENT_DEVIATION" | "STRESS_EVENT" | "RELAXATION" |
          "PAUSE" | "RESUME" | "RESET" | "EVALUATION"
  - mode: "READY" | "SPEAKING" | "PAUSED" | "FINISHED" (or None)
  - phase: free-form sub-state, e.g. "relax_start" (or None)

  FUNCTIONS:
  - log_event(event_type, payload, mode=None, phase=None): appends one line.
    Creates the log directory if needed.
  - read_events(limit=None): parses every line back into a dict. If limit is
    set, returns only the last limit records.
  - clear_events(): truncates the log (used by "Reset" in the dashboard).

  FILE LOCATION:
  LOG_FILE is relative to the current working directory unless absolute.
  PODIUM_EVENTS_LOG overrides it at import time.
"""
import json
import os
from pathlib import Path
from datetime import datetime, timezone
from typing import Any

from dotenv import load_dotenv

from podium.constants import EVENTS_LOG_PATH, ENV_EVENTS_LOG

load_dotenv()

LOG_FILE = Path(os.getenv(ENV_EVENTS_LOG) or EVENTS_LOG_PATH)


def _log_path() -> Path:
    p = Path(LOG_FILE)
    if not p.is_absolute():
        p = Path.cwd() / p
    return p


def _ensure_log_dir() -> None:
    p = _log_path().parent
    p.mkdir(parents=True, exist_ok=True)


def log_event(
    event_type: str,
    payload: dict[str, Any],
    mode: str | None = None,
    phase: str | None = None,
) -> None:
    """
    Append one event to the events log.
    payload is merged into the record (timestamp, type, mode, phase added).
    """
    _ensure_log_dir()
    record = {
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "type": event_type,
        "mode": mode,
        "phase": phase,
        **payload,
    }
    with open(_log_path(), "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")


def read_events(limit: int | None = None) -> list[dict]:
    """
    Read events from the log.
    If limit is set, return only the last limit lines.
    """
    p = _log_path()
    if not p.exists():
        return []
    lines = p.read_text(encoding="utf-8").strip().split("\n")
    lines = [ln for ln in lines if ln]
    if limit is not None:
        lines = lines[-limit:]
    out = []
    for ln in lines:
        try:
            out.append(json.loads(ln))
        except json.JSONDecodeError:
            continue
    return out


def clear_events() -> None:
    p = _log_path()
    if p.exists():
        p.write_text("", encoding="utf-8")
