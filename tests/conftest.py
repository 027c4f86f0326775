import pytest

from fingertap.config import AssessmentConfig
from fingertap.core import TrialController
from tests.fixtures.fakes import FakeClock, FakeTimer


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timers():
    FakeTimer.created = []
    yield FakeTimer.created
    FakeTimer.created = []


@pytest.fixture
def make_controller(clock, timers):
    """Build a controller on the fake clock and timer, with config overrides."""

    def factory(**options):
        return TrialController(
            AssessmentConfig(**options), clock=clock, timer_factory=FakeTimer
        )

    return factory


@pytest.fixture
def recorder():
    """A listener that keeps every event it receives."""

    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, event):
            self.events.append(event)

        def of_type(self, event_type):
            return [e for e in self.events if e.type == event_type]

    return Recorder()
