"""
Rubric scoring engine for Podium Coach.

Dimensions (0-100 each):
  1. Fluency              — fewer filler words = higher
  2. Content              — fewer deviations from the planned outline = higher
  3. Interaction          — eye contact (60%) blended with audience attention (40%)
  4. Time Control         — finishing on time or early scores full marks
  5. Emotional Stability  — calmer average heart rate = higher

Overall = weighted sum of the five (weights must add up to 1.0), then mapped
to a grade: Excellent / Good / Average / Pass / NeedsImprovement.

Everything here is a pure function of SessionMetrics: no randomness, no I/O.
Missing or simulated inputs are handled upstream in podium.sources.
"""

import csv
import io
import json
import math
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from podium.constants import (
    FLUENCY_STEPS, FLUENCY_FLOOR,
    CONTENT_STEPS, CONTENT_FLOOR,
    TIME_CONTROL_STEPS, TIME_CONTROL_FLOOR,
    HEART_RATE_STEPS, HEART_RATE_FLOOR,
    EYE_CONTACT_WEIGHT, ATTENTION_WEIGHT,
    WEIGHT_FLUENCY, WEIGHT_CONTENT, WEIGHT_INTERACTION,
    WEIGHT_TIME_CONTROL, WEIGHT_EMOTIONAL_STABILITY,
    GRADE_STEPS, BAND_STRONG, BAND_FAIR,
    DIMENSIONS,
)
from podium.logger import read_events
from podium.metrics import SessionMetrics

Grade = Literal["Excellent", "Good", "Average", "Pass", "NeedsImprovement"]
Band = Literal["strong", "fair", "weak"]

_WEIGHT_TOLERANCE = 1e-9


class ScoringWeights(BaseModel):
    """Per-dimension weights of the overall score. Must sum to exactly 1.0."""
    model_config = ConfigDict(frozen=True)

    fluency: float = Field(default=WEIGHT_FLUENCY, ge=0)
    content: float = Field(default=WEIGHT_CONTENT, ge=0)
    interaction: float = Field(default=WEIGHT_INTERACTION, ge=0)
    time_control: float = Field(default=WEIGHT_TIME_CONTROL, ge=0)
    emotional_stability: float = Field(default=WEIGHT_EMOTIONAL_STABILITY, ge=0)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "ScoringWeights":
        total = math.fsum(getattr(self, d) for d in DIMENSIONS)
        if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=_WEIGHT_TOLERANCE):
            raise ValueError(f"scoring weights must sum to 1.0, got {total!r}")
        return self


# Validated at import: a bad edit to the weight constants fails loudly here.
DEFAULT_WEIGHTS = ScoringWeights()


class EvaluationReport(BaseModel):
    """Immutable record of one session: raw metrics, sub-scores, overall, grade."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    filler_word_count: int
    content_deviation_count: int
    eye_contact_percentage: float
    time_overrun_seconds: float
    average_heart_rate: float
    audience_attention_percentage: float
    stutter_count: int = 0

    fluency_score: float = Field(ge=0, le=100)
    content_score: float = Field(ge=0, le=100)
    interaction_score: float = Field(ge=0, le=100)
    time_control_score: float = Field(ge=0, le=100)
    emotional_stability_score: float = Field(ge=0, le=100)

    overall_score: float = Field(ge=0, le=100)
    grade: Grade
    weakest_dimension: str

    def scores(self) -> dict[str, float]:
        """Sub-scores keyed by dimension name, in tie-break order."""
        return {d: getattr(self, f"{d}_score") for d in DIMENSIONS}


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------

def _step_at_most(value: float, steps: list[tuple[float, float]], floor: float) -> float:
    for bound, score in steps:
        if value <= bound:
            return score
    return floor


def _step_below(value: float, steps: list[tuple[float, float]], floor: float) -> float:
    for bound, score in steps:
        if value < bound:
            return score
    return floor


def fluency(filler_words: int) -> float:
    return _step_at_most(filler_words, FLUENCY_STEPS, FLUENCY_FLOOR)


def content(deviations: int) -> float:
    return _step_at_most(deviations, CONTENT_STEPS, CONTENT_FLOOR)


def interaction(eye_contact_pct: float, audience_attention_pct: float) -> float:
    blended = eye_contact_pct * EYE_CONTACT_WEIGHT + audience_attention_pct * ATTENTION_WEIGHT
    return min(100.0, max(0.0, blended))


def time_control(overrun_seconds: float) -> float:
    return _step_at_most(overrun_seconds, TIME_CONTROL_STEPS, TIME_CONTROL_FLOOR)


def emotional_stability(avg_heart_rate: float) -> float:
    # Boundaries are exclusive here: exactly 85 bpm already drops to 90.
    return _step_below(avg_heart_rate, HEART_RATE_STEPS, HEART_RATE_FLOOR)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def overall_score(scores: dict[str, float], weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    total = math.fsum(getattr(weights, d) * scores[d] for d in DIMENSIONS)
    return min(100.0, max(0.0, round(total, 6)))


def grade(overall: float) -> Grade:
    for bound, label in GRADE_STEPS:
        if overall >= bound:
            return label
    return "NeedsImprovement"


def score_band(overall: float) -> Band:
    """Colour band for the summary line."""
    if overall >= BAND_STRONG:
        return "strong"
    if overall >= BAND_FAIR:
        return "fair"
    return "weak"


def weakest_dimension(scores: dict[str, float]) -> str:
    """Dimension with the lowest score; ties go to the earlier one in DIMENSIONS."""
    lowest = min(scores[d] for d in DIMENSIONS)
    for d in DIMENSIONS:
        if scores[d] == lowest:
            return d
    return DIMENSIONS[-1]


def dimension_scores(metrics: SessionMetrics) -> dict[str, float]:
    return {
        "fluency": fluency(metrics.filler_word_count),
        "content": content(metrics.content_deviation_count),
        "interaction": interaction(
            metrics.eye_contact_percentage, metrics.audience_attention_percentage,
        ),
        "time_control": time_control(metrics.time_overrun_seconds),
        "emotional_stability": emotional_stability(metrics.average_heart_rate),
    }


def evaluate(
    metrics: SessionMetrics,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    timestamp: datetime | None = None,
) -> EvaluationReport:
    scores = dimension_scores(metrics)
    overall = overall_score(scores, weights)
    return EvaluationReport(
        timestamp=timestamp or datetime.now(),
        **metrics.model_dump(),
        **{f"{d}_score": s for d, s in scores.items()},
        overall_score=overall,
        grade=grade(overall),
        weakest_dimension=weakest_dimension(scores),
    )


# ---------------------------------------------------------------------------
# Export helpers
# ---------------------------------------------------------------------------

def report_to_dict(report: EvaluationReport) -> dict[str, Any]:
    return report.model_dump(mode="json")


def report_to_json(report: EvaluationReport) -> str:
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)


def history_to_csv(reports: list[EvaluationReport]) -> str:
    if not reports:
        return ""
    rows = [report_to_dict(r) for r in reports]
    fieldnames = list(rows[0].keys())
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buf.getvalue()


def events_to_csv() -> str:
    events = read_events()
    if not events:
        return ""
    all_keys = set()
    for e in events:
        all_keys.update(e.keys())
    all_keys = sorted(all_keys)
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=all_keys, extrasaction="ignore")
    writer.writeheader()
    for e in events:
        writer.writerow(e)
    return buf.getvalue()
