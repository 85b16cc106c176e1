from podium.timers import TimerQueue


def test_timers_fire_in_due_order():
    q = TimerQueue()
    fired = []
    q.schedule(3.0, lambda: fired.append("late"), name="late")
    q.schedule(1.0, lambda: fired.append("early"), name="early")
    assert q.tick(0.5) == []
    assert q.tick(0.5) == ["early"]
    assert q.tick(5.0) == ["late"]
    assert fired == ["early", "late"]


def test_simultaneous_timers_fire_in_insertion_order():
    q = TimerQueue()
    fired = []
    for name in ("a", "b", "c"):
        q.schedule(1.0, lambda n=name: fired.append(n), name=name)
    q.tick(1.0)
    assert fired == ["a", "b", "c"]


def test_rescheduling_a_name_replaces_it():
    q = TimerQueue()
    fired = []
    q.schedule(2.0, lambda: fired.append("first"), name="warn")
    q.tick(1.5)
    q.schedule(2.0, lambda: fired.append("second"), name="warn")
    q.tick(1.0)
    assert fired == []
    q.tick(1.0)
    assert fired == ["second"]


def test_cancel_and_pending():
    q = TimerQueue()
    q.schedule(1.0, lambda: None, name="x")
    q.schedule(2.0, lambda: None, name="y")
    q.schedule(0.5, lambda: None)
    assert q.pending() == ["x", "y"]
    assert q.cancel("x") is True
    assert q.cancel("missing") is False
    assert q.pending() == ["y"]
    q.clear()
    assert q.pending() == []


def test_callback_may_schedule_immediate_followup():
    q = TimerQueue()
    fired = []

    def first():
        fired.append("first")
        q.schedule(0.0, lambda: fired.append("follow"), name="follow")

    q.schedule(1.0, first, name="first")
    assert q.tick(1.0) == ["first", "follow"]
    assert fired == ["first", "follow"]
    assert q.now == 1.0
