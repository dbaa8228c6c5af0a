import asyncio
from datetime import datetime, timezone

import pytest

from parcel_tracking.geo_utils import distance_snapshot
from parcel_tracking.models import Route, TrackerState
from parcel_tracking.progress_simulator import ProgressSimulator
from parcel_tracking.route_registry import ROUTES
from parcel_tracking.track_config import TrackConfig


def make_route(tracking_id="BLR555"):
    return Route.from_template(ROUTES[tracking_id], datetime.now(timezone.utc))


@pytest.fixture
def sim():
    return ProgressSimulator(TrackConfig(tick_interval_s=0.01))


def test_starts_idle(sim):
    assert sim.state == TrackerState.IDLE
    assert not sim.is_active
    assert sim.route is None
    assert sim.current_index is None
    assert sim.advance() is False


def test_start_enters_tracking_at_zero(sim):
    route = make_route()
    progress = sim.start(route, run_timer=False)

    assert sim.state == TrackerState.TRACKING
    assert progress.route is route
    assert sim.current_index == 0
    assert not sim.timer_running


def test_advance_is_clamped(sim):
    route = make_route()
    sim.start(route, run_timer=False)

    changes = [sim.advance() for _ in range(len(route.path) + 3)]

    assert sim.current_index == len(route.path) - 1
    assert changes.count(True) == len(route.path) - 1
    assert sim.at_destination
    # Arrival is not a separate state
    assert sim.state == TrackerState.TRACKING


def test_remaining_distance_decreases_with_each_advance(sim):
    route = make_route()
    sim.start(route, run_timer=False)
    previous = distance_snapshot(route.path, sim.current_index).remaining
    while sim.advance():
        remaining = distance_snapshot(route.path, sim.current_index).remaining
        assert remaining < previous
        previous = remaining
    assert previous == pytest.approx(0.0)


def test_reset_returns_to_idle(sim):
    sim.start(make_route(), run_timer=False)
    sim.advance()
    sim.reset()
    assert sim.state == TrackerState.IDLE
    assert sim.progress is None
    sim.reset()  # idempotent


def test_start_requires_running_loop_for_timer(sim):
    with pytest.raises(RuntimeError):
        sim.start(make_route())
    assert sim.state == TrackerState.IDLE


def test_observers(sim):
    seen = []
    unsubscribe = sim.subscribe(lambda p: seen.append(None if p is None else p.current_index))

    sim.start(make_route(), run_timer=False)
    sim.advance()
    sim.reset()
    assert seen == [0, 1, None]

    unsubscribe()
    sim.start(make_route(), run_timer=False)
    assert seen == [0, 1, None]


def test_failing_observer_does_not_break_simulation(sim):
    def broken(_):
        raise RuntimeError("boom")

    seen = []
    sim.subscribe(broken)
    sim.subscribe(seen.append)
    sim.start(make_route(), run_timer=False)
    assert sim.advance() is True
    assert len(seen) == 2


def test_timer_walks_route_to_the_end(sim):
    route = make_route()

    async def scenario():
        arrived = asyncio.Event()
        sim.subscribe(lambda p: p is not None and p.at_destination and arrived.set())
        sim.start(route)
        assert sim.timer_running
        await asyncio.wait_for(arrived.wait(), timeout=5)
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert sim.current_index == route.last_index
    assert not sim.timer_running
    assert sim.state == TrackerState.TRACKING


def test_reset_cancels_pending_tick():
    sim = ProgressSimulator(TrackConfig(tick_interval_s=0.05))
    seen = []

    async def scenario():
        sim.subscribe(seen.append)
        progress = sim.start(make_route())
        timer = sim._timer
        sim.reset()
        await asyncio.sleep(0.2)
        return progress, timer

    progress, timer = asyncio.run(scenario())
    assert timer.cancelled()
    assert progress.current_index == 0
    assert sim.state == TrackerState.IDLE
    assert seen == [progress, None]


def test_restart_replaces_previous_timer():
    sim = ProgressSimulator(TrackConfig(tick_interval_s=0.05))

    async def scenario():
        first = sim.start(make_route("CHN123"))
        first_timer = sim._timer
        second = sim.start(make_route("MUM777"))
        await asyncio.sleep(0)
        assert first_timer.cancelled()
        assert sim._timer is not first_timer
        await asyncio.sleep(0.2)
        sim.reset()
        return first, second

    first, second = asyncio.run(scenario())
    assert first.current_index == 0
    assert second.current_index > 0


def test_stale_tick_loop_never_mutates_superseded_state(sim):
    async def scenario():
        stale = sim.start(make_route(), run_timer=False)
        sim.start(make_route("CHN123"), run_timer=False)
        await sim._run_ticks(stale)
        return stale

    stale = asyncio.run(scenario())
    assert stale.current_index == 0
    assert sim.route.tracking_id == "CHN123"
    assert sim.current_index == 0
