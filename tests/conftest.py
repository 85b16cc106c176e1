import random

import pytest

import podium.logger


@pytest.fixture(autouse=True)
def _isolated_event_log(tmp_path, monkeypatch):
    """Every test writes events to its own tmp file instead of ./logs."""
    monkeypatch.setattr(podium.logger, "LOG_FILE", tmp_path / "events.jsonl")


class ScriptedRandom:
    """Deterministic stand-in for random.Random: random() replays a script."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)

    def choice(self, seq):
        return seq[0]

    def uniform(self, a, b):
        return (a + b) / 2.0


@pytest.fixture
def rng():
    return random.Random(1234)
