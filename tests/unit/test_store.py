"""
SQLite-backed scenario store.
"""

from dataclasses import replace

import pytest

from core.config import StoreConfig
from scenarios import ScenarioListing, ScenarioStore


@pytest.fixture
def store(tmp_path):
    s = ScenarioStore(StoreConfig(database_url=f"sqlite:///{tmp_path / 'scenarios.db'}"))
    yield s
    s.close()


class TestScenarioStore:
    def test_empty_store(self, store):
        assert store.list() == []
        assert store.load("missing") is None

    def test_save_and_load(self, store, household_scenario):
        store.save(household_scenario)
        assert store.load("household") == household_scenario

    def test_list_most_recent_first(self, store, make_scenario):
        store.save(make_scenario(id="old", name="Old", updated_at_iso="2026-01-01T00:00:00.000Z"))
        store.save(make_scenario(id="new", name="New", updated_at_iso="2026-03-01T00:00:00.000Z"))
        store.save(make_scenario(id="mid", name="Mid", updated_at_iso="2026-02-01T00:00:00.000Z"))
        assert [item.id for item in store.list()] == ["new", "mid", "old"]
        assert store.list()[0] == ScenarioListing("new", "New", "2026-03-01T00:00:00.000Z")

    def test_save_upserts_by_id(self, store, base_scenario):
        store.save(base_scenario)
        renamed = replace(base_scenario, name="Renamed", updated_at_iso="2026-05-01T00:00:00.000Z")
        store.save(renamed)
        listing = store.list()
        assert len(listing) == 1
        assert listing[0].name == "Renamed"
        assert store.load(base_scenario.id) == renamed

    def test_delete(self, store, base_scenario):
        store.save(base_scenario)
        store.delete(base_scenario.id)
        assert store.load(base_scenario.id) is None
        assert store.list() == []

    def test_delete_unknown_is_noop(self, store, base_scenario):
        store.save(base_scenario)
        store.delete("nope")
        assert len(store.list()) == 1

    def test_persists_across_instances(self, tmp_path, base_scenario):
        config = StoreConfig(database_url=f"sqlite:///{tmp_path / 'shared.db'}")
        first = ScenarioStore(config)
        first.save(base_scenario)
        first.close()
        second = ScenarioStore(config)
        try:
            assert second.load(base_scenario.id) == base_scenario
        finally:
            second.close()


class TestStoreConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DECISION_ENGINE_DB_URL", "sqlite:///:memory:")
        monkeypatch.setenv("DECISION_ENGINE_DB_ECHO", "true")
        config = StoreConfig.from_env()
        assert config.database_url == "sqlite:///:memory:"
        assert config.echo is True

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DECISION_ENGINE_DB_URL", raising=False)
        monkeypatch.delenv("DECISION_ENGINE_DB_ECHO", raising=False)
        config = StoreConfig.from_env()
        assert config.database_url == "sqlite:///decision_engine.db"
        assert config.echo is False
