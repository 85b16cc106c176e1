"""
Helpers: load training-profile JSON and read environment settings.

================================================================================
HOW THIS SCRIPT WORKS (for studying)
================================================================================

  load_profile(path):
  - Reads a JSON file (e.g. profiles/default.json) and returns a dict.
  - A profile sets the planned talk length, whether to stop automatically at
    that length, and tuning for the simulators ("heart_rate", "attention",
    "speech", "eye_contact" sections), plus the filler words and caption
    phrases. Anything left out falls back to podium.constants.
  - Path can be relative to cwd or absolute. Raises if the file is missing
    or is not valid JSON; the dashboard wraps it in load_profile_safe().

  get_settings():
  - Loads .env (python-dotenv) and returns the PODIUM_* overrides:
    profile_path, events_log, seed (int or None).

  profile_section(profile, name):
  - Returns the dict under profile[name], or {} when absent.
"""
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from podium.constants import (
    PROFILE_PATH, EVENTS_LOG_PATH,
    ENV_PROFILE_PATH, ENV_EVENTS_LOG, ENV_SEED,
    PRESENTATION_SECONDS_DEFAULT, AUTO_STOP_DEFAULT,
)


def load_profile(path: str | Path = PROFILE_PATH) -> dict[str, Any]:
    """
    Load profile JSON from path (relative to cwd or absolute).
    Raises if file missing or invalid JSON.
    """
    p = Path(path)
    if not p.is_absolute():
        p = Path.cwd() / p
    with open(p, encoding="utf-8") as f:
        return json.load(f)


def default_profile() -> dict[str, Any]:
    return {
        "name": "Default",
        "presentation_seconds": PRESENTATION_SECONDS_DEFAULT,
        "auto_stop": AUTO_STOP_DEFAULT,
    }


def load_profile_safe(path: str | Path = PROFILE_PATH) -> dict[str, Any]:
    try:
        return load_profile(path)
    except (OSError, json.JSONDecodeError):
        return default_profile()


def profile_section(profile: dict[str, Any], name: str) -> dict[str, Any]:
    section = profile.get(name) or {}
    return section if isinstance(section, dict) else {}


def get_settings() -> dict[str, Any]:
    load_dotenv()
    seed = os.getenv(ENV_SEED, "").strip()
    return {
        "profile_path": os.getenv(ENV_PROFILE_PATH) or PROFILE_PATH,
        "events_log": os.getenv(ENV_EVENTS_LOG) or EVENTS_LOG_PATH,
        "seed": int(seed) if seed.lstrip("-").isdigit() else None,
    }
