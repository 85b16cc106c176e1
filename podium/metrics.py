"""
Session metrics: the raw numbers one rehearsal accumulates.

SessionAccumulator is the only writer. Simulators and the session controller
call its record_* / sample_* methods from the dashboard's single frame loop;
snapshot() hands a frozen SessionMetrics to the scoring engine. Once close()
has been called the accumulator refuses further writes, so the metrics behind
a report can never drift after the report exists.

Samples (heart rate, eye contact, attention) are clamped to their domain on
the way in and averaged on the way out. With no samples, snapshot() reports
the neutral placeholders from podium.constants.
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from podium.constants import (
    HEART_RATE_MIN, HEART_RATE_MAX, HEART_RATE_BASE,
    PERCENT_MIN, PERCENT_MAX,
    NEUTRAL_EYE_CONTACT, NEUTRAL_ATTENTION, NEUTRAL_OVERRUN,
)


class SessionClosedError(RuntimeError):
    """Raised when a closed session accumulator receives a new metric."""


class SessionMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    filler_word_count: int = Field(default=0, ge=0)
    content_deviation_count: int = Field(default=0, ge=0)
    eye_contact_percentage: float = Field(default=NEUTRAL_EYE_CONTACT, ge=PERCENT_MIN, le=PERCENT_MAX)
    time_overrun_seconds: float = NEUTRAL_OVERRUN
    average_heart_rate: float = Field(default=HEART_RATE_BASE, ge=HEART_RATE_MIN, le=HEART_RATE_MAX)
    audience_attention_percentage: float = Field(default=NEUTRAL_ATTENTION, ge=PERCENT_MIN, le=PERCENT_MAX)
    stutter_count: int = Field(default=0, ge=0)


def clamp(value: float, lo: float, hi: float) -> float:
    return float(min(hi, max(lo, value)))


def _mean_or(samples: list[float], default: float) -> float:
    if not samples:
        return default
    return float(np.mean(samples))


class SessionAccumulator:
    """
    Collects metric updates during one session.

    - record_filler_word / record_stutter / record_content_deviation: +1 counters.
    - sample_heart_rate / sample_eye_contact / sample_attention: clamped samples.
    - record_overrun(seconds): latest elapsed-minus-planned value (may be negative).
    - snapshot(): current SessionMetrics.
    - close(): freeze; later writes raise SessionClosedError.
    """

    def __init__(self) -> None:
        self._filler_words = 0
        self._stutters = 0
        self._content_deviations = 0
        self._heart_rates: list[float] = []
        self._eye_contact: list[float] = []
        self._attention: list[float] = []
        self._overrun = NEUTRAL_OVERRUN
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise SessionClosedError("session already evaluated; metrics are frozen")

    def record_filler_word(self) -> int:
        self._check_open()
        self._filler_words += 1
        return self._filler_words

    def record_stutter(self) -> int:
        self._check_open()
        self._stutters += 1
        return self._stutters

    def record_content_deviation(self) -> int:
        self._check_open()
        self._content_deviations += 1
        return self._content_deviations

    def sample_heart_rate(self, bpm: float) -> None:
        self._check_open()
        self._heart_rates.append(clamp(bpm, HEART_RATE_MIN, HEART_RATE_MAX))

    def sample_eye_contact(self, pct: float) -> None:
        self._check_open()
        self._eye_contact.append(clamp(pct, PERCENT_MIN, PERCENT_MAX))

    def sample_attention(self, pct: float) -> None:
        self._check_open()
        self._attention.append(clamp(pct, PERCENT_MIN, PERCENT_MAX))

    def record_overrun(self, seconds: float) -> None:
        self._check_open()
        self._overrun = float(seconds)

    def close(self) -> SessionMetrics:
        """Freeze the accumulator and return the final snapshot."""
        self._closed = True
        return self.snapshot()

    def snapshot(self) -> SessionMetrics:
        return SessionMetrics(
            filler_word_count=self._filler_words,
            content_deviation_count=self._content_deviations,
            eye_contact_percentage=_mean_or(self._eye_contact, NEUTRAL_EYE_CONTACT),
            time_overrun_seconds=self._overrun,
            average_heart_rate=_mean_or(self._heart_rates, HEART_RATE_BASE),
            audience_attention_percentage=_mean_or(self._attention, NEUTRAL_ATTENTION),
            stutter_count=self._stutters,
        )
