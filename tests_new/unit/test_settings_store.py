"""Tests for per-chat settings persistence."""

import json

import pytest

from app.models import ChatSettings
from app.services.settings_store import InMemorySettingsStore, JsonFileSettingsStore


@pytest.fixture
def json_store(tmp_path):
    return JsonFileSettingsStore(tmp_path / "nested" / "database.json")


class TestJsonFileSettingsStore:
    def test_creates_empty_database(self, json_store) -> None:
        assert json.loads(json_store.db_path.read_text()) == {}

    def test_set_then_get(self, json_store) -> None:
        json_store.set(42, "token", "abc")

        assert json_store.get(42, "token") == "abc"
        assert json_store.get("42", "token") == "abc"
        assert json_store.get(42, "header") is None
        assert json_store.get(7, "token") is None

    def test_set_preserves_sibling_keys(self, json_store) -> None:
        json_store.set(42, "token", "abc")
        json_store.set(42, "footer", "bye")
        json_store.set(43, "token", "other")

        data = json.loads(json_store.db_path.read_text())

        assert data == {"42": {"token": "abc", "footer": "bye"}, "43": {"token": "other"}}

    def test_delete(self, json_store) -> None:
        json_store.set(42, "token", "abc")
        json_store.set(42, "channel", "@chan")

        assert json_store.delete(42, "channel") is True
        assert json_store.delete(42, "channel") is False
        assert json_store.delete(99, "channel") is False
        assert json_store.get(42, "token") == "abc"

    def test_reads_file_on_every_access(self, json_store) -> None:
        json_store.db_path.write_text(json.dumps({"5": {"header": "edited"}}))

        assert json_store.get(5, "header") == "edited"

    def test_corrupt_file_reads_as_empty(self, json_store) -> None:
        json_store.db_path.write_text("{not json")

        assert json_store.get(42, "token") is None
        assert json_store.get_settings(42) == ChatSettings()

        json_store.set(42, "token", "fresh")

        assert json.loads(json_store.db_path.read_text()) == {"42": {"token": "fresh"}}

    def test_get_settings(self, json_store) -> None:
        json_store.set(42, "token", "abc")
        json_store.set(42, "channel", "-1001234")

        settings = json_store.get_settings(42)

        assert settings.token == "abc"
        assert settings.channel == "-1001234"
        assert settings.header is None

    def test_hand_edited_non_string_values(self, json_store) -> None:
        json_store.db_path.write_text(
            json.dumps({"42": {"token": "t", "channel": -1001234567890, "header": ["x"]}})
        )

        settings = json_store.get_settings(42)

        assert settings.channel == "-1001234567890"
        assert settings.header is None
        assert json_store.get(42, "channel") == "-1001234567890"

    def test_save_replaces_file_without_leftovers(self, json_store) -> None:
        json_store.set(42, "token", "abc")

        assert json.loads(json_store.db_path.read_text()) == {"42": {"token": "abc"}}
        assert list(json_store.db_path.parent.iterdir()) == [json_store.db_path]


class TestInMemorySettingsStore:
    def test_contract_matches_file_store(self) -> None:
        store = InMemorySettingsStore({"1": {"token": "t"}})

        store.set(1, "header", "h")

        assert store.get(1, "token") == "t"
        assert store.get_settings(1) == ChatSettings(token="t", header="h")
        assert store.delete(1, "header") is True
        assert store.delete(1, "header") is False
