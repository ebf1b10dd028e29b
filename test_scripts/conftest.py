# Shared fixtures: every test gets its own in-memory database and a
# deterministic clock so created_at values are distinct and ordered.
from __future__ import annotations

import itertools
import logging
from datetime import datetime, timedelta, timezone

import pytest

from roadmap_dashboard.db.session import create_storage_engine
from roadmap_dashboard.schemas.roadmap_plan import PhaseDates
from roadmap_dashboard.services.capability_store import CapabilityStore
from roadmap_dashboard.services.data_store import AppDataStore
from roadmap_dashboard.services.local_storage import LocalStorage
from roadmap_dashboard.services.milestone_store import MilestoneStore
from roadmap_dashboard.services.plan_store import PlanStore

logger = logging.getLogger(__name__)

CLOCK_START = datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns CLOCK_START, then one minute later on every call."""

    def __init__(self, start: datetime = CLOCK_START, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start - step
        self.step = step

    def __call__(self) -> datetime:
        self.current = self.current + self.step
        return self.current


def make_phase_dates(start: datetime = datetime(2026, 2, 1, tzinfo=timezone.utc), step_days: int = 10) -> PhaseDates:
    """Ten back-to-back dates, `step_days` apart."""
    names = [
        "requirement_start_date", "requirement_end_date",
        "design_start_date", "design_end_date",
        "dev_start_date", "dev_end_date",
        "cst_start_date", "cst_end_date",
        "uat_start_date", "uat_end_date",
    ]
    return PhaseDates(**{name: start + timedelta(days=i * step_days) for i, name in enumerate(names)})


@pytest.fixture
def engine():
    eng = create_storage_engine("sqlite://")
    yield eng
    eng.dispose()


@pytest.fixture
def storage(engine) -> LocalStorage:
    return LocalStorage.from_engine(engine)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def data_store(storage, clock, id_factory) -> AppDataStore:
    store = AppDataStore(storage=storage, storage_key="testData", clock=clock, id_factory=id_factory)
    store.load()
    return store


@pytest.fixture
def plan_store(data_store) -> PlanStore:
    return PlanStore(data_store, strict_active_check=True)


@pytest.fixture
def capability_store(data_store) -> CapabilityStore:
    return CapabilityStore(data_store)


@pytest.fixture
def milestone_store(data_store) -> MilestoneStore:
    return MilestoneStore(data_store)


@pytest.fixture
def phase_dates() -> PhaseDates:
    return make_phase_dates()
