# test_scripts/test_persistence.py

"""Local storage round-trips, malformed data handling and export/import."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from conftest import make_phase_dates
from roadmap_dashboard.db.session import create_session_factory, create_storage_engine
from roadmap_dashboard.errors import DataImportError, DataLoadError
from roadmap_dashboard.schemas.app_data import AppData
from roadmap_dashboard.services.dashboard import Dashboard
from roadmap_dashboard.services.data_store import AppDataStore
from roadmap_dashboard.services.local_storage import LocalStorage
from roadmap_dashboard.services.serialization import deserialize_app_data, serialize_app_data


@pytest.fixture
def populated(data_store, capability_store, milestone_store, plan_store):
    milestone_store.add({"name": "MVP", "date": "2026-06-30"})
    cap = capability_store.add({"name": "Payments", "milestone": "MVP", "status": "Completed"})
    capability_store.add({"name": "Ledger"})
    plan_store.add_plan(cap.id, make_phase_dates())
    plan_store.add_plan(cap.id, make_phase_dates(step_days=5))
    return data_store


def test_local_storage_get_set_remove(storage):
    assert storage.get_item("k") is None
    storage.set_item("k", "v1")
    storage.set_item("k", "v2")
    assert storage.get_item("k") == "v2"
    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_every_mutation_is_persisted(populated, storage, clock, id_factory):
    reloaded = AppDataStore(storage=storage, storage_key="testData", clock=clock, id_factory=id_factory)
    data = reloaded.load()

    assert data == populated.data
    assert [p.version for p in data.roadmap_plans] == [1, 2]


def test_persisted_format_uses_camel_case_and_iso_dates(populated, storage):
    raw = json.loads(storage.get_item("testData"))

    assert set(raw) == {"capabilities", "milestones", "roadmapPlans"}
    plan = raw["roadmapPlans"][0]
    assert plan["capabilityId"] == populated.data.capabilities[0].id
    assert plan["isActive"] is False
    assert plan["requirementStartDate"] == "2026-02-01T00:00:00.000000Z"
    assert raw["capabilities"][0]["ragStatus"] == "Green"


def test_round_trip_reproduces_collections(populated):
    text = serialize_app_data(populated.data)
    assert deserialize_app_data(text) == populated.data


def test_load_missing_entry_gives_empty_aggregate(storage):
    store = AppDataStore(storage=storage, storage_key="absent")
    assert store.load() == AppData.empty()


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[]",
        json.dumps({"capabilities": [], "milestones": []}),
        json.dumps({"capabilities": [], "milestones": [{"id": "m", "name": "x", "date": "bad"}], "roadmapPlans": []}),
    ],
)
def test_malformed_persisted_data_loads_empty(storage, raw, caplog):
    storage.set_item("broken", raw)
    store = AppDataStore(storage=storage, storage_key="broken")

    with caplog.at_level("ERROR"):
        data = store.load()

    assert data == AppData.empty()
    assert any(r.getMessage() == "data_store.load.malformed" for r in caplog.records)


def test_deserialize_rejects_missing_collections():
    with pytest.raises(DataLoadError):
        deserialize_app_data(json.dumps({"capabilities": []}))


def test_save_failure_keeps_in_memory_state(capability_store, data_store):
    failing = MagicMock()
    failing.set_item.side_effect = RuntimeError("disk full")
    data_store._storage = failing

    cap = capability_store.add({"name": "Payments"})

    assert capability_store.get(cap.id) == cap
    failing.set_item.assert_called_once()


def test_export_import_replaces_everything(populated, storage):
    exported = populated.export_json()
    other = AppDataStore(storage=storage, storage_key="other")
    other.load()

    other.import_json(exported)

    assert other.data == populated.data
    assert json.loads(storage.get_item("other")) == json.loads(exported)


@pytest.mark.parametrize("text", ["", "   ", "nope", json.dumps({"capabilities": []})])
def test_failed_import_leaves_store_unchanged(populated, text):
    before = populated.data

    with pytest.raises(DataImportError):
        populated.import_json(text)

    assert populated.data is before


def test_reset_clears_all_data(populated, storage):
    populated.reset()

    assert populated.data == AppData.empty()
    assert json.loads(storage.get_item("testData")) == {
        "capabilities": [],
        "milestones": [],
        "roadmapPlans": [],
    }


def test_stats_and_dashboard_summary(populated):
    stats = populated.stats()
    assert (stats.capabilities, stats.milestones, stats.roadmap_plans) == (2, 1, 2)
    assert stats.total_size == len(serialize_app_data(populated.data))
    assert stats.total_size_kb == round(stats.total_size / 1024, 1)

    summary = populated.dashboard_summary()
    assert summary.total_capabilities == 2
    assert summary.milestones == 1
    assert summary.active_plans == 1
    assert summary.completed_capabilities == 1


def test_local_storage_uses_shared_session_factory(engine):
    with patch(
        "roadmap_dashboard.services.local_storage.create_session_factory",
        wraps=create_session_factory,
    ) as factory:
        storage = LocalStorage.from_engine(engine)

    factory.assert_called_once_with(engine)
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"


def test_unreadable_database_file_starts_empty(tmp_path, caplog):
    db_file = tmp_path / "roadmap.db"
    db_file.write_bytes(b"this is not an sqlite database " * 64)
    broken_engine = create_storage_engine(f"sqlite:///{db_file}")

    with caplog.at_level("ERROR"):
        dashboard = Dashboard.from_engine(broken_engine)

    assert dashboard.store.data == AppData.empty()
    assert any(r.getMessage() == "data_store.load.malformed" for r in caplog.records)

    dashboard.add_capability({"name": "Payments"})
    assert db_file.read_bytes().startswith(b"this is not an sqlite database")
    broken_engine.dispose()


def test_storage_read_error_loads_empty(caplog):
    failing = MagicMock()
    failing.get_item.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    store = AppDataStore(storage=failing, storage_key="testData")

    with caplog.at_level("ERROR"):
        data = store.load()

    assert data == AppData.empty()
    assert any(r.getMessage() == "data_store.load.malformed" for r in caplog.records)
