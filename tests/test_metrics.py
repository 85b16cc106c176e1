import pytest

from podium.metrics import SessionAccumulator, SessionClosedError, SessionMetrics


def test_fresh_snapshot_uses_defaults():
    snap = SessionAccumulator().snapshot()
    assert snap.filler_word_count == 0
    assert snap.content_deviation_count == 0
    assert snap.stutter_count == 0
    assert snap.time_overrun_seconds == 0
    assert snap.average_heart_rate == 75.0
    assert snap.eye_contact_percentage == 50.0
    assert snap.audience_attention_percentage == 60.0


def test_counters_accumulate():
    acc = SessionAccumulator()
    for _ in range(3):
        acc.record_filler_word()
    acc.record_content_deviation()
    acc.record_stutter()
    snap = acc.snapshot()
    assert snap.filler_word_count == 3
    assert snap.content_deviation_count == 1
    assert snap.stutter_count == 1


def test_samples_are_averaged():
    acc = SessionAccumulator()
    acc.sample_heart_rate(80)
    acc.sample_heart_rate(100)
    acc.sample_eye_contact(60)
    acc.sample_eye_contact(70)
    acc.sample_attention(40)
    snap = acc.snapshot()
    assert snap.average_heart_rate == pytest.approx(90.0)
    assert snap.eye_contact_percentage == pytest.approx(65.0)
    assert snap.audience_attention_percentage == pytest.approx(40.0)


def test_samples_are_clamped():
    acc = SessionAccumulator()
    acc.sample_heart_rate(200)
    acc.sample_eye_contact(-5)
    acc.sample_attention(130)
    snap = acc.snapshot()
    assert snap.average_heart_rate == 140.0
    assert snap.eye_contact_percentage == 0.0
    assert snap.audience_attention_percentage == 100.0


def test_overrun_keeps_latest_value_and_sign():
    acc = SessionAccumulator()
    acc.record_overrun(15)
    acc.record_overrun(-20.5)
    assert acc.snapshot().time_overrun_seconds == -20.5


def test_close_freezes_metrics():
    acc = SessionAccumulator()
    acc.record_filler_word()
    final = acc.close()
    assert acc.closed
    assert isinstance(final, SessionMetrics)
    for mutate in (
        acc.record_filler_word,
        acc.record_stutter,
        acc.record_content_deviation,
        lambda: acc.sample_heart_rate(90),
        lambda: acc.sample_eye_contact(50),
        lambda: acc.sample_attention(50),
        lambda: acc.record_overrun(3),
    ):
        with pytest.raises(SessionClosedError):
            mutate()
    assert acc.snapshot() == final


def test_snapshot_is_independent_of_later_updates():
    acc = SessionAccumulator()
    acc.record_filler_word()
    first = acc.snapshot()
    acc.record_filler_word()
    assert first.filler_word_count == 1
    assert acc.snapshot().filler_word_count == 2
