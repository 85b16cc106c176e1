"""
Dashboard state: the live PresentationSession and the EvaluationHistory.

================================================================================
HOW THIS SCRIPT WORKS (for studying)
================================================================================

Streamlit re-runs app.py top to bottom on every interaction, so anything that
must survive a rerun lives in st.session_state. This module is the only place
that creates or replaces the session/history objects there; app.py calls
init_state(), get_session(), get_history() and new_session() instead of
touching the keys directly.

  - init_state(profile, seed): create history + session once per browser tab.
  - get_session() / get_history(): read them back.
  - new_session(profile, seed): replace the session (e.g. after a profile
    change) while keeping the history, so past reports stay visible.
  - get_mode(): the session status, upper-cased for the event log.
  - request_nav() / apply_nav_request(): switch the sidebar section from
    code (e.g. to Report after Stop). The radio owns its key, so the switch
    is parked under a separate key and written in before the radio is drawn.

  Every function takes an optional `store` mapping. The dashboard leaves it
  out (st.session_state is used); tests pass a plain dict.
"""
import random
from typing import Any, MutableMapping

import streamlit as st

from podium.constants import KEY_SESSION, KEY_HISTORY, KEY_PROFILE, KEY_NAV, KEY_NAV_REQUEST
from podium.history import EvaluationHistory
from podium.session import PresentationSession


def _store(store: MutableMapping[str, Any] | None) -> MutableMapping[str, Any]:
    return st.session_state if store is None else store


def _build_session(profile: dict, history: EvaluationHistory, seed: int | None) -> PresentationSession:
    return PresentationSession(profile=profile, history=history, rng=random.Random(seed))


def init_state(
    profile: dict,
    seed: int | None = None,
    store: MutableMapping[str, Any] | None = None,
) -> None:
    """Create history and session if not already present."""
    s = _store(store)
    if KEY_HISTORY not in s:
        s[KEY_HISTORY] = EvaluationHistory()
    if KEY_PROFILE not in s:
        s[KEY_PROFILE] = profile
    if KEY_SESSION not in s:
        s[KEY_SESSION] = _build_session(s[KEY_PROFILE], s[KEY_HISTORY], seed)


def new_session(
    profile: dict,
    seed: int | None = None,
    store: MutableMapping[str, Any] | None = None,
) -> PresentationSession:
    """Replace the live session, keeping the history."""
    s = _store(store)
    history = s.get(KEY_HISTORY)
    if history is None:
        history = EvaluationHistory()
        s[KEY_HISTORY] = history
    s[KEY_PROFILE] = profile
    s[KEY_SESSION] = _build_session(profile, history, seed)
    return s[KEY_SESSION]


def get_session(store: MutableMapping[str, Any] | None = None) -> PresentationSession:
    return _store(store)[KEY_SESSION]


def get_history(store: MutableMapping[str, Any] | None = None) -> EvaluationHistory:
    return _store(store)[KEY_HISTORY]


def get_mode(store: MutableMapping[str, Any] | None = None) -> str:
    s = _store(store)
    session = s.get(KEY_SESSION)
    return session.status.upper() if session is not None else "READY"


def request_nav(section: str, store: MutableMapping[str, Any] | None = None) -> None:
    """Ask for a section switch; applied by apply_nav_request() on the next run."""
    _store(store)[KEY_NAV_REQUEST] = section


def apply_nav_request(
    sections: list[str],
    default: str | None = None,
    store: MutableMapping[str, Any] | None = None,
) -> str:
    """
    Move a pending section request into the nav widget's key.
    Must run before the radio is drawn: Streamlit only accepts writes to a
    widget key before the widget exists in the current run.
    """
    s = _store(store)
    pending = s.pop(KEY_NAV_REQUEST, None)
    if pending in sections:
        s[KEY_NAV] = pending
    elif s.get(KEY_NAV) not in sections:
        s[KEY_NAV] = default if default is not None else sections[0]
    return s[KEY_NAV]
