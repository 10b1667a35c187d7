"""Тесты NoteTools — мост инструментов."""

import json

import pytest

from semantic_notes.core import EmbeddingProvider
from semantic_notes.integrations import NoteTools
from semantic_notes.pipeline import NotesCore


@pytest.fixture
def tools(core):
    return NoteTools(core)


class TestDefinitions:
    """Описания инструментов."""

    def test_all_tools_listed(self, tools):
        names = [definition["name"] for definition in tools.definitions()]

        assert names == ["list_notes", "get_note", "save_note", "delete_note", "semantic_search"]

    def test_schemas_have_required_fields(self, tools):
        schemas = {d["name"]: d["schema"] for d in tools.definitions()}

        assert set(schemas["save_note"]["required"]) == {"title", "content"}
        assert schemas["semantic_search"]["properties"]["limit"]["default"] == 5
        assert "required" not in schemas["list_notes"]


class TestOperations:
    """Операции над заметками."""

    def test_save_list_get(self, tools):
        saved = tools.call("save_note", {"title": "Cats", "content": "<p>purr</p>"})

        assert tools.call("list_notes") == [{"id": saved["id"], "title": "Cats"}]
        note = tools.call("get_note", {"id": str(saved["id"])})
        assert note["content"] == "<p>purr</p>"
        assert note["isSynced"] is True

    def test_update_by_id(self, tools):
        saved = tools.call("save_note", {"title": "Cats", "content": "purr"})

        updated = tools.call(
            "save_note", {"id": str(saved["id"]), "title": "Cats", "content": "nap"}
        )

        assert updated["id"] == saved["id"]
        assert len(tools.call("list_notes")) == 1

    def test_empty_id_creates_note(self, tools):
        saved = tools.call("save_note", {"id": "", "title": "Cats", "content": "purr"})

        assert saved["id"] == 1
        assert tools.call("list_notes") == [{"id": 1, "title": "Cats"}]

    def test_get_missing(self, tools):
        assert tools.call("get_note", {"id": "42"}) == {"error": "Note not found"}

    def test_update_missing_is_not_found(self, tools):
        result = tools.call("save_note", {"id": "42", "title": "x", "content": "y"})

        assert result == {"error": "Note not found"}
        assert tools.call("list_notes") == []

    def test_delete(self, tools):
        saved = tools.call("save_note", {"title": "Cats", "content": "purr"})

        assert tools.call("delete_note", {"id": saved["id"]}) == {"success": True}
        assert tools.call("delete_note", {"id": "missing"}) == {"success": True}
        assert tools.call("list_notes") == []

    def test_semantic_search(self, tools):
        for title in ("Cats", "Dogs", "Birds"):
            tools.call("save_note", {"title": title, "content": ""})

        # Текст заметки "Cats " совпадает с запросом дословно
        hits = tools.call("semantic_search", {"query": "Cats ", "limit": 2})

        assert len(hits) == 2
        assert hits[0]["title"] == "Cats"
        assert set(hits[0]) == {"id", "title", "similarity"}

    def test_semantic_search_without_model(self, store):
        def broken():
            raise OSError("no model")

        tools = NoteTools(NotesCore(store=store, provider=EmbeddingProvider(broken)))

        assert tools.call("semantic_search", {"query": "cats"}) == {
            "error": "Failed to generate embedding"
        }

    def test_results_are_json_serializable(self, tools):
        saved = tools.call("save_note", {"title": "Cats", "content": "purr", "links": ["2"]})

        json.dumps(saved)
        json.dumps(tools.call("semantic_search", {"query": "Cats"}))
        assert saved["links"] == [2]


class TestDispatch:
    """Ошибки вызова."""

    def test_unknown_tool(self, tools):
        assert tools.call("drop_database") == {"error": "Unknown tool: drop_database"}

    def test_invalid_arguments(self, tools):
        result = tools.call("save_note", {"title": "no content"})

        assert result["error"] == "Invalid arguments"
        assert result["details"]
