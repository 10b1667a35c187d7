"""Тесты PeeweeSettingsStore и PeeweeApiKeyStore."""

import re
from unittest.mock import patch

import pytest
from peewee import OperationalError

from semantic_notes.errors import StorageFailure
from semantic_notes.infrastructure.storage import PeeweeApiKeyStore, PeeweeSettingsStore


@pytest.fixture
def settings(store, in_memory_db):
    """Настройки на той же БД (таблицы создаёт store)."""
    return PeeweeSettingsStore(in_memory_db)


@pytest.fixture
def api_keys(store, in_memory_db):
    return PeeweeApiKeyStore(in_memory_db)


class TestSettingsStore:
    """Настройки ключ-значение."""

    def test_get_missing_returns_default(self, settings):
        assert settings.get("theme") is None
        assert settings.get("theme", "dark") == "dark"

    def test_set_and_get_json_values(self, settings):
        settings.set("theme", "light")
        settings.set("graph", {"threshold": 0.8, "labels": True})

        assert settings.get("theme") == "light"
        assert settings.get("graph") == {"threshold": 0.8, "labels": True}

    def test_set_overwrites(self, settings):
        settings.set("theme", "light")
        settings.set("theme", "dark")

        assert settings.get("theme") == "dark"
        assert settings.all() == {"theme": "dark"}

    def test_delete(self, settings):
        settings.set("theme", "light")

        settings.delete("theme")
        settings.delete("missing")

        assert settings.all() == {}

    def test_engine_failure_is_wrapped(self, settings):
        with patch.object(settings.model, "get_or_none", side_effect=OperationalError("locked")):
            with pytest.raises(StorageFailure):
                settings.get("theme")


class TestApiKeyStore:
    """Ключи внешнего моста."""

    def test_generate_format_and_default_names(self, api_keys):
        """Ключ вида sk_<32 hex>, имена Key 1, Key 2."""
        first = api_keys.generate()
        second = api_keys.generate()

        assert re.fullmatch(r"sk_[0-9a-f]{32}", first.key)
        assert first.key != second.key
        assert (first.name, second.name) == ("Key 1", "Key 2")

    def test_generate_with_name(self, api_keys):
        api_key = api_keys.generate("laptop")

        assert api_key.name == "laptop"
        assert api_key.id is not None

    def test_list_and_delete(self, api_keys):
        first = api_keys.generate()
        second = api_keys.generate()

        api_keys.delete(first.id)

        assert [api_key.id for api_key in api_keys.list()] == [second.id]

    def test_verify(self, api_keys):
        api_key = api_keys.generate()

        assert api_keys.verify(api_key.key) is True
        api_keys.delete(api_key.id)
        assert api_keys.verify(api_key.key) is False

    def test_masked_hides_secret(self, api_keys):
        api_key = api_keys.generate()

        assert api_key.masked.startswith("sk_")
        assert api_key.key[3:-4] not in api_key.masked
