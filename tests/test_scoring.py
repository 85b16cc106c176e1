import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from podium.metrics import SessionMetrics
from podium.scoring import (
    DEFAULT_WEIGHTS, ScoringWeights,
    fluency, content, interaction, time_control, emotional_stability,
    overall_score, grade, score_band, weakest_dimension, evaluate,
    report_to_json, history_to_csv,
)


def test_fluency_boundaries():
    assert fluency(0) == 100
    assert fluency(10) == 100
    assert fluency(11) == 85
    assert fluency(20) == 85
    assert fluency(35) == 70
    assert fluency(50) == 55
    assert fluency(51) == 40


def test_fluency_non_increasing():
    scores = [fluency(n) for n in range(0, 80)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_content_steps():
    assert [content(n) for n in range(7)] == [100, 90, 75, 60, 60, 45, 45]
    scores = [content(n) for n in range(0, 30)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_interaction_is_linear_blend():
    assert interaction(100, 100) == 100
    assert interaction(0, 0) == 0
    assert interaction(50, 0) == pytest.approx(30.0)
    assert interaction(0, 50) == pytest.approx(20.0)
    assert interaction(80, 70) == pytest.approx(76.0)


def test_time_control_boundaries():
    assert time_control(-45) == 100
    assert time_control(0) == 100
    assert time_control(30) == 90
    assert time_control(31) == 75
    assert time_control(60) == 75
    assert time_control(120) == 60
    assert time_control(120.5) == 40


def test_emotional_stability_exclusive_boundaries():
    assert emotional_stability(84.9) == 100
    assert emotional_stability(85) == 90
    assert emotional_stability(94.9) == 90
    assert emotional_stability(95) == 75
    assert emotional_stability(105) == 60
    assert emotional_stability(115) == 45
    assert emotional_stability(140) == 45


def test_perfect_scores_give_exactly_100():
    perfect = {d: 100.0 for d in ("fluency", "content", "interaction", "time_control", "emotional_stability")}
    assert overall_score(perfect) == 100.0


def test_default_weights_sum_to_one():
    total = (DEFAULT_WEIGHTS.fluency + DEFAULT_WEIGHTS.content + DEFAULT_WEIGHTS.interaction
             + DEFAULT_WEIGHTS.time_control + DEFAULT_WEIGHTS.emotional_stability)
    assert total == pytest.approx(1.0)


def test_weights_not_summing_to_one_are_rejected():
    with pytest.raises(ValueError):
        ScoringWeights(fluency=0.5)


def test_custom_weights_are_applied():
    weights = ScoringWeights(
        fluency=1.0, content=0.0, interaction=0.0, time_control=0.0, emotional_stability=0.0,
    )
    scores = {"fluency": 70.0, "content": 0.0, "interaction": 0.0, "time_control": 0.0,
              "emotional_stability": 0.0}
    assert overall_score(scores, weights) == 70.0


@pytest.mark.parametrize("overall,expected", [
    (100, "Excellent"),
    (90, "Excellent"),
    (89.9, "Good"),
    (80, "Good"),
    (79.9, "Average"),
    (70, "Average"),
    (60, "Pass"),
    (59.9, "NeedsImprovement"),
    (0, "NeedsImprovement"),
])
def test_grade_boundaries(overall, expected):
    assert grade(overall) == expected


def test_score_band():
    assert score_band(85) == "strong"
    assert score_band(84.9) == "fair"
    assert score_band(70) == "fair"
    assert score_band(69.9) == "weak"


def test_weakest_dimension_tie_prefers_fluency():
    scores = {"fluency": 50, "content": 50, "interaction": 80, "time_control": 90,
              "emotional_stability": 75}
    assert weakest_dimension(scores) == "fluency"


def test_weakest_dimension_tie_later_pair():
    scores = {"fluency": 90, "content": 90, "interaction": 60, "time_control": 60,
              "emotional_stability": 60}
    assert weakest_dimension(scores) == "interaction"


def test_weakest_dimension_strict_minimum():
    scores = {"fluency": 90, "content": 90, "interaction": 80, "time_control": 90,
              "emotional_stability": 45}
    assert weakest_dimension(scores) == "emotional_stability"


def test_end_to_end_excellent_session():
    metrics = SessionMetrics(
        filler_word_count=8,
        content_deviation_count=0,
        eye_contact_percentage=80,
        time_overrun_seconds=-10,
        average_heart_rate=80,
        audience_attention_percentage=70,
    )
    ts = datetime(2026, 10, 19, 9, 30)
    report = evaluate(metrics, timestamp=ts)

    assert report.timestamp == ts
    assert report.fluency_score == 100
    assert report.content_score == 100
    assert report.interaction_score == pytest.approx(76.0)
    assert report.time_control_score == 100
    assert report.emotional_stability_score == 100
    assert report.overall_score == pytest.approx(95.2)
    assert report.grade == "Excellent"
    assert report.weakest_dimension == "interaction"
    assert report.filler_word_count == 8
    assert report.time_overrun_seconds == -10


def test_struggling_session():
    metrics = SessionMetrics(
        filler_word_count=60,
        content_deviation_count=5,
        eye_contact_percentage=20,
        time_overrun_seconds=200,
        average_heart_rate=130,
        audience_attention_percentage=10,
    )
    report = evaluate(metrics)
    assert report.fluency_score == 40
    assert report.content_score == 45
    assert report.time_control_score == 40
    assert report.emotional_stability_score == 45
    assert report.interaction_score == pytest.approx(16.0)
    assert report.grade == "NeedsImprovement"
    assert report.weakest_dimension == "interaction"


def test_evaluate_is_deterministic():
    metrics = SessionMetrics(filler_word_count=22, content_deviation_count=3)
    ts = datetime(2026, 1, 1)
    assert evaluate(metrics, timestamp=ts) == evaluate(metrics, timestamp=ts)


def test_report_is_frozen():
    report = evaluate(SessionMetrics())
    with pytest.raises(ValidationError):
        report.overall_score = 0


def test_out_of_domain_metrics_are_rejected():
    with pytest.raises(ValidationError):
        SessionMetrics(average_heart_rate=30)
    with pytest.raises(ValidationError):
        SessionMetrics(filler_word_count=-1)
    with pytest.raises(ValidationError):
        SessionMetrics(eye_contact_percentage=120)


def test_report_to_json_contains_scores():
    report = evaluate(SessionMetrics(filler_word_count=12))
    data = json.loads(report_to_json(report))
    assert data["fluency_score"] == 85
    assert data["grade"] == report.grade
    assert "timestamp" in data


def test_history_to_csv():
    reports = [evaluate(SessionMetrics(filler_word_count=n)) for n in (5, 15)]
    lines = history_to_csv(reports).strip().splitlines()
    assert len(lines) == 3
    assert "overall_score" in lines[0]
    assert history_to_csv([]) == ""
