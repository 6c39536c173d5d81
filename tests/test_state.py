"""Tests for navigation state and AIS target storage."""

from datetime import datetime, timedelta, timezone

import pytest

from bosun.ais.models import AISReport, NavigationStatus
from bosun.nmea.state import AISTargets, Coordinates, NavigationState
from bosun.units import Meters


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 2, 15, 0, 2, 50, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


def _report(mmsi: int = 367338290, **fields) -> AISReport:
    values = dict(
        message_type=1,
        mmsi=mmsi,
        navigation_status_code=None,
        speed_over_ground=None,
        longitude=None,
        latitude=None,
        course_over_ground=None,
        true_heading=None,
        ship_name=None,
        call_sign=None,
        ship_type=None,
    )
    values.update(fields)
    return AISReport(**values)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def targets(clock) -> AISTargets:
    return AISTargets(clock=clock)


class TestAISTargets:
    """Test upsert and pruning of targets."""

    def test_upsert_creates_target(self, targets, clock):
        target = targets.upsert(_report(latitude=37.8, longitude=-122.4))

        assert len(targets) == 1
        assert 367338290 in targets
        assert target.created_at == clock.now
        assert target.position == Coordinates(37.8, -122.4)

    def test_upsert_keeps_unsupplied_fields(self, targets, clock):
        targets.upsert(_report(message_type=5, ship_name="ALCATRAZ FLYER", ship_type=99))
        created_at = clock.now

        clock.now += timedelta(seconds=10)
        target = targets.upsert(
            _report(speed_over_ground=7.5, latitude=37.82, longitude=-122.41)
        )

        assert target.name == "ALCATRAZ FLYER"
        assert target.ship_type == 99
        assert target.speed_over_ground == 7.5
        assert target.created_at == created_at
        assert target.updated_at == clock.now

    def test_empty_name_does_not_erase(self, targets):
        targets.upsert(_report(ship_name="SEA BREEZE"))
        target = targets.upsert(_report(ship_name=""))
        assert target.name == "SEA BREEZE"

    def test_navigation_status(self, targets):
        target = targets.upsert(_report(navigation_status_code=5))
        assert target.navigation_status is NavigationStatus.MOORED

    def test_prune_removes_stale(self, targets, clock):
        targets.upsert(_report(mmsi=1))
        clock.now += timedelta(minutes=5)
        targets.upsert(_report(mmsi=2))

        clock.now += timedelta(minutes=1)
        assert targets.prune(timedelta(minutes=3)) == 1
        assert 1 not in targets
        assert targets.get(2) is not None

    def test_iteration_is_a_snapshot(self, targets):
        targets.upsert(_report(mmsi=1))
        targets.upsert(_report(mmsi=2))
        for target in targets:
            targets.prune(timedelta(seconds=-1))
        assert len(targets) == 0


class TestNavigationState:
    """Test the navigation snapshot."""

    def test_starts_empty(self):
        state = NavigationState()
        assert state.draft is None
        assert state.position is None
        assert state.ais is None

    def test_ais_created_on_first_report(self, clock):
        state = NavigationState(clock=clock)
        state.upsert_target(_report())
        assert len(state.ais) == 1
        assert state.ais.get(367338290).created_at == clock.now

    def test_reset(self):
        state = NavigationState(
            draft=Meters(4.0),
            heading_magnetic=185.2,
            heading_true=197.9,
            position=Coordinates(37.45, -122.18),
        )
        state.upsert_target(_report())
        state.reset()
        assert state == NavigationState()

    def test_to_dict(self):
        state = NavigationState(draft=Meters(4.0), position=Coordinates(37.45, -122.18))
        data = state.to_dict()
        assert data["draft"] == 4.0
        assert data["latitude"] == 37.45
        assert data["heading_true"] is None
        assert data["ais_target_count"] == 0
