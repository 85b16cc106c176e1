"""
Collaborator adapters between metric sources and the scoring engine.

The scoring engine only ever sees a SessionMetrics. Building one from the
outside world happens here:

  - Each source is described by a small Protocol (attention, heart rate,
    speech, timing, eye contact). The simulators in podium.simulators and
    the session controller satisfy them; real sensors could too.
  - collect_metrics() asks every source it was given. A missing source, or
    one that answers None, is replaced with the neutral default listed in
    NEUTRAL_DEFAULTS. Out-of-range answers are clamped. Absence degrades
    gracefully, it is never an error.
  - PlaceholderSource reproduces the random stand-in numbers used when a
    rehearsal is too short or a sensor is absent. It is opt-in, seeded and
    lives only on this side of the boundary.
"""

import random
from typing import Protocol, runtime_checkable

from podium.constants import (
    HEART_RATE_MIN, HEART_RATE_MAX, HEART_RATE_BASE,
    PERCENT_MIN, PERCENT_MAX,
    NEUTRAL_EYE_CONTACT, NEUTRAL_ATTENTION, NEUTRAL_OVERRUN,
    PLACEHOLDER_FILLER_RANGE, PLACEHOLDER_DEVIATION_RANGE,
    PLACEHOLDER_HEART_RATE_RANGE, PLACEHOLDER_EYE_CONTACT_RANGE,
    PLACEHOLDER_OVERRUN_RANGE,
)
from podium.metrics import SessionMetrics, clamp


@runtime_checkable
class AttentionSource(Protocol):
    def current_attention_percentage(self) -> float | None: ...


@runtime_checkable
class HeartRateSource(Protocol):
    def average_heart_rate(self) -> float | None: ...


@runtime_checkable
class SpeechSource(Protocol):
    def filler_word_count(self) -> int | None: ...

    def content_deviation_count(self) -> int | None: ...


@runtime_checkable
class TimingSource(Protocol):
    def overrun_seconds(self) -> float | None: ...


@runtime_checkable
class EyeContactSource(Protocol):
    def eye_contact_percentage(self) -> float | None: ...


NEUTRAL_DEFAULTS = {
    "filler_word_count": 0,
    "content_deviation_count": 0,
    "eye_contact_percentage": NEUTRAL_EYE_CONTACT,
    "time_overrun_seconds": NEUTRAL_OVERRUN,
    "average_heart_rate": HEART_RATE_BASE,
    "audience_attention_percentage": NEUTRAL_ATTENTION,
}


def _count(value: int | None, key: str) -> int:
    if value is None:
        return NEUTRAL_DEFAULTS[key]
    return max(0, int(value))


def _reading(value: float | None, key: str, lo: float | None = None, hi: float | None = None) -> float:
    if value is None:
        return float(NEUTRAL_DEFAULTS[key])
    if lo is None or hi is None:
        return float(value)
    return clamp(value, lo, hi)


def collect_metrics(
    attention: AttentionSource | None = None,
    heart_rate: HeartRateSource | None = None,
    speech: SpeechSource | None = None,
    timing: TimingSource | None = None,
    eye_contact: EyeContactSource | None = None,
    stutter_count: int = 0,
) -> SessionMetrics:
    """Ask each source for its value; substitute neutral defaults for absent ones."""
    return SessionMetrics(
        filler_word_count=_count(speech.filler_word_count() if speech else None, "filler_word_count"),
        content_deviation_count=_count(
            speech.content_deviation_count() if speech else None, "content_deviation_count",
        ),
        eye_contact_percentage=_reading(
            eye_contact.eye_contact_percentage() if eye_contact else None,
            "eye_contact_percentage", PERCENT_MIN, PERCENT_MAX,
        ),
        time_overrun_seconds=_reading(timing.overrun_seconds() if timing else None, "time_overrun_seconds"),
        average_heart_rate=_reading(
            heart_rate.average_heart_rate() if heart_rate else None,
            "average_heart_rate", HEART_RATE_MIN, HEART_RATE_MAX,
        ),
        audience_attention_percentage=_reading(
            attention.current_attention_percentage() if attention else None,
            "audience_attention_percentage", PERCENT_MIN, PERCENT_MAX,
        ),
        stutter_count=max(0, stutter_count),
    )


class PlaceholderSource:
    """
    Random stand-in readings for every source protocol at once.

    Each call draws a fresh value from the configured ranges, so create one
    per session and pass it only for the sources that are really missing.
    """

    def __init__(self, rng: random.Random):
        self.rng = rng

    def current_attention_percentage(self) -> float:
        return NEUTRAL_ATTENTION

    def average_heart_rate(self) -> float:
        return self.rng.uniform(*PLACEHOLDER_HEART_RATE_RANGE)

    def filler_word_count(self) -> int:
        return self.rng.randint(*PLACEHOLDER_FILLER_RANGE)

    def content_deviation_count(self) -> int:
        return self.rng.randint(*PLACEHOLDER_DEVIATION_RANGE)

    def overrun_seconds(self) -> float:
        return self.rng.uniform(*PLACEHOLDER_OVERRUN_RANGE)

    def eye_contact_percentage(self) -> float:
        return self.rng.uniform(*PLACEHOLDER_EYE_CONTACT_RANGE)
