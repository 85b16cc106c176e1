import random

import pytest
from pydantic import ValidationError

from podium.history import EvaluationHistory
from podium.logger import read_events
from podium.metrics import SessionClosedError
from podium.session import PresentationSession


def _session(seed=42, **profile):
    base = {"name": "test", "presentation_seconds": 60, "auto_stop": False}
    base.update(profile)
    return PresentationSession(profile=base, rng=random.Random(seed))


def test_initial_state():
    session = _session()
    assert session.status == "ready"
    assert not session.is_presenting
    assert session.timer_label() == "00:00"
    assert session.stop() is None


def test_full_session_produces_report():
    session = _session()
    session.start()
    for _ in range(40):
        session.tick(0.5)
    report = session.stop()

    assert report is not None
    assert session.status == "finished"
    assert len(session.history) == 1
    assert session.history.latest() is report
    assert session.last_report is report
    assert report.time_overrun_seconds == pytest.approx(-40.0)
    assert report.time_control_score == 100
    assert 60.0 <= report.average_heart_rate <= 140.0
    assert report.filler_word_count == session.speech.filler_word_count()


def test_stopping_early_still_scores_partial_data():
    session = _session()
    session.start()
    session.tick(0.5)
    report = session.stop()
    assert report is not None
    assert report.grade in {"Excellent", "Good", "Average", "Pass", "NeedsImprovement"}


def test_metrics_are_frozen_after_evaluation():
    session = _session()
    session.start()
    session.tick(1.0)
    session.stop()
    with pytest.raises(SessionClosedError):
        session.accumulator.record_filler_word()
    # ticks after the report no longer sample into the closed accumulator
    session.tick(1.0)


def test_overrun_is_scored():
    session = _session(presentation_seconds=10)
    session.start()
    for _ in range(90):
        session.tick(0.5)
    report = session.stop()
    assert report.time_overrun_seconds == pytest.approx(35.0)
    assert report.time_control_score == 75


def test_auto_stop_at_planned_duration():
    session = _session(presentation_seconds=2, auto_stop=True)
    session.start()
    assert session.tick(1.0) is None
    report = session.tick(1.0)
    assert report is not None
    assert session.status == "finished"
    assert report.time_overrun_seconds == pytest.approx(0.0)


def test_pause_freezes_time():
    session = _session()
    session.start()
    session.tick(1.0)
    session.pause()
    assert session.status == "paused"
    session.tick(5.0)
    assert session.elapsed == pytest.approx(1.0)
    session.resume()
    session.tick(1.0)
    assert session.elapsed == pytest.approx(2.0)


def test_history_keeps_session_order():
    history = EvaluationHistory()
    session = PresentationSession(history=history, rng=random.Random(5))
    reports = []
    for _ in range(3):
        session.start()
        for _ in range(10):
            session.tick(1.0)
        reports.append(session.stop())
    assert history.all() == tuple(reports)
    with pytest.raises(ValidationError):
        history[0].overall_score = 1.0


def test_relaxation_ends_after_timer():
    session = _session()
    session.start()
    session.trigger_relaxation()
    assert session.heart_rate.relaxing
    session.tick(4.0)
    assert session.heart_rate.relaxing
    session.tick(1.0)
    assert not session.heart_rate.relaxing
    assert session.heart_rate.speaking


def test_warning_banner_expires():
    session = _session()
    session.start()
    session.show_warning("stutter", 2.0)
    assert "stutter" in session.active_warnings
    session.timers.tick(2.0)
    assert "stutter" not in session.active_warnings


def test_relax_prompt_shows_on_high_heart_rate():
    session = _session()
    session.start()
    session.heart_rate.current = 130.0
    assert "relax" in session.active_warnings


def test_report_banner_after_stop():
    session = _session()
    session.start()
    session.stop()
    assert "generating_report" in session.active_warnings
    session.tick(1.5)
    assert "generating_report" not in session.active_warnings


def test_timer_label_and_band():
    session = _session(presentation_seconds=100)
    session.start()
    session.elapsed = 65
    assert session.timer_label() == "01:05"
    assert session.timer_band() == "normal"
    session.elapsed = 75
    assert session.timer_band() == "warning"
    session.elapsed = 90
    assert session.timer_band() == "critical"


def test_quick_test_mode():
    session = _session()
    session.quick_test_mode()
    assert session.planned_seconds == 30.0
    assert session.status == "speaking"


def test_reset_stops_running_session():
    session = _session()
    session.start()
    session.tick(1.0)
    report = session.reset()
    assert report is not None
    assert session.status == "ready"
    assert session.elapsed == 0.0
    assert len(session.history) == 1


def test_coaching_hooks():
    session = _session()
    session.start()
    before = session.heart_rate.current
    session.simulate_stress_event()
    assert session.heart_rate.current == pytest.approx(min(140.0, before + 20.0))
    session.attention.attention = 50.0
    session.simulate_excellent_performance()
    assert session.attention.attention >= 70.0
    session.add_content_deviation()
    session.add_filler_word()
    report = session.stop()
    assert report.content_deviation_count == 1
    assert report.filler_word_count >= 1


def test_coaching_hooks_after_stop_do_not_touch_report():
    session = _session()
    session.start()
    session.tick(1.0)
    session.add_content_deviation()
    report = session.stop()
    assert session.add_content_deviation() == 1
    session.add_filler_word()
    assert session.speech.content_deviation_count() == report.content_deviation_count == 1
    assert session.speech.filler_word_count() == report.filler_word_count


def test_coaching_hooks_before_start_are_ignored():
    session = _session()
    assert session.add_filler_word() == 0
    assert session.add_content_deviation() == 0
    assert session.speech.filler_word_count() == 0
    assert "CONTENT_DEVIATION" not in [e["type"] for e in read_events()]


def test_session_events_are_logged():
    session = _session()
    session.start()
    session.tick(1.0)
    session.stop()
    types = [e["type"] for e in read_events()]
    assert types[0] == "SESSION_START"
    assert "SESSION_STOP" in types
    assert types[-1] == "EVALUATION"


def test_profile_tuning_reaches_simulators():
    session = _session(
        heart_rate={"base_rate": 70},
        attention={"audience_size": 4},
        speech={"detection_interval": 1.0},
        eye_contact={"low": 50, "high": 60},
        filler_words=["hmm"],
    )
    assert session.heart_rate.base_rate == 70
    assert session.attention.total_count() == 4
    assert session.speech.detection_interval == 1.0
    assert session.speech.filler_words == ["hmm"]
    assert session.eye_contact.low == 50
