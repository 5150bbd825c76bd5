import pytest


class ManualScheduler:
    """Collects one-shot timers so tests decide when they fire."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))

    def fire(self):
        delay_ms, callback = self.pending.pop(0)
        callback()
        return delay_ms


class ScriptedRandom:
    """Stands in for random.Random with fixed target, jitter and turn count."""

    def __init__(self, target, jitter=0.0, turns=3):
        self.target = target
        self.jitter = jitter
        self.turns = turns
        self.choices = []

    def choice(self, seq):
        self.choices.append(list(seq))
        assert self.target in seq
        return self.target

    def uniform(self, a, b):
        assert a <= self.jitter <= b
        return self.jitter

    def randint(self, a, b):
        assert a <= self.turns <= b
        return self.turns


class RecordingPlayer:
    def __init__(self):
        self.played = []

    def play(self, label):
        self.played.append(label)
        return True

    def busy(self):
        return False


LETTERS = ["A", "B", "C", "D", "E", "F", "G", "H"]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def player():
    return RecordingPlayer()
