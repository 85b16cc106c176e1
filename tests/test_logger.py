from podium.logger import clear_events, log_event, read_events


def test_log_and_read_back():
    log_event("SESSION_START", {"planned_seconds": 300}, mode="SPEAKING")
    log_event("FILLER_WORD", {"filler": "um", "count": 1}, mode="SPEAKING", phase=None)
    events = read_events()
    assert [e["type"] for e in events] == ["SESSION_START", "FILLER_WORD"]
    assert events[0]["planned_seconds"] == 300
    assert events[1]["mode"] == "SPEAKING"
    assert "timestamp" in events[0]


def test_read_limit_and_clear():
    for i in range(5):
        log_event("PAUSE", {"i": i})
    assert [e["i"] for e in read_events(limit=2)] == [3, 4]
    clear_events()
    assert read_events() == []


def test_missing_log_reads_empty():
    assert read_events() == []
