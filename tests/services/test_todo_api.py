"""Todo Api — the in-process facade.

Tests cover:
    - Empty ids rejected with InvalidArgumentError
    - save_* chooses create vs update by id presence
    - Filters reach the filter engine
"""

import pytest

from todomock.core.errors import InvalidArgumentError
from todomock.services.todo_api import TodoApi


@pytest.fixture
def api(frozen_store):
    return TodoApi(frozen_store)


async def test_get_todo_requires_id(api):
    with pytest.raises(InvalidArgumentError, match="Todo id is required"):
        await api.get_todo("")


async def test_get_label_requires_id(api):
    with pytest.raises(InvalidArgumentError, match="Label id is required"):
        await api.get_label(None)


async def test_save_todo_creates_then_updates(api):
    created = await api.save_todo({"title": "A"})
    assert created["id"] == "id-1"

    updated = await api.save_todo({"id": created["id"], "completed": True})
    assert updated["completed"] is True
    assert await api.get_todo(created["id"]) == updated
    assert len(await api.get_todos()) == 1


async def test_save_label_creates_then_updates(api):
    created = await api.save_label({"title": "Bug"})
    updated = await api.save_label({"id": created["id"], "color": "red"})
    assert updated == {"id": created["id"], "title": "Bug", "color": "red"}


async def test_get_todos_with_filter(api):
    await api.save_todo({"title": "A", "completed": True})
    await api.save_todo({"title": "B"})
    done = await api.get_todos({"completed": {"$eq": True}})
    assert [t["title"] for t in done] == ["A"]


async def test_get_labels_with_literal_filter(api):
    await api.save_label({"title": "Bug"})
    await api.save_label({"title": "Feature"})
    assert [lbl["title"] for lbl in await api.get_labels({"title": "Feature"})] == [
        "Feature",
    ]


async def test_delete_passthrough(api):
    label = await api.save_label({"title": "Bug"})
    assert await api.delete_label(label["id"]) == label["id"]
    assert await api.get_label(label["id"]) is None
    todo = await api.save_todo({"title": "A"})
    assert await api.delete_todo(todo["id"]) == todo["id"]
    assert await api.delete_todo(todo["id"]) == todo["id"]
