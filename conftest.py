import pytest

from game.engine import FarmEngine
from game.persistence import SaveStore
from game.sim.timebase import set_sim_now_ms
from game.state import PlayerState
from game.systems.calendar import begin_day

T0 = 1_700_000_000_000
DAY_KEY = "2024-01-01"


@pytest.fixture(autouse=True)
def pinned_clock():
    """Pin sim time for every test; release it afterwards."""
    set_sim_now_ms(T0)
    yield T0
    set_sim_now_ms(None)


@pytest.fixture
def state():
    """Fresh day-1 farm on 2024-01-01."""
    s = PlayerState()
    begin_day(s, DAY_KEY)
    return s


@pytest.fixture
def store(tmp_path):
    return SaveStore(tmp_path / "save.json")


class FakeCalendar:
    """Settable day key for driving rollovers."""

    def __init__(self, key=DAY_KEY):
        self.key = key

    def __call__(self):
        return self.key


@pytest.fixture
def calendar_day():
    return FakeCalendar()


@pytest.fixture
def engine(store, calendar_day):
    e = FarmEngine(store, day_key_fn=calendar_day)
    e.boot()
    return e
