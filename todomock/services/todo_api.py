"""Todo Api — in-process facade over the Store, the only way to reach the filter engine.

Invariants:
    - get_todo / get_label raise InvalidArgumentError on an empty id (before any pause)
    - save_* updates when the payload carries an id, creates otherwise
    - Filters are passed through untouched; the wire boundary never supplies one
"""

from typing import Any, Mapping

from todomock.core.domain_types import Record, RecordId
from todomock.core.errors import InvalidArgumentError
from todomock.services.store import Store


def _has_id(payload: Any) -> bool:
    return isinstance(payload, Mapping) and bool(payload.get("id"))


class TodoApi:
    """Facade mirroring the browser client's data API."""

    def __init__(self, store: Store):
        self.store = store

    # ─── Todos ───────────────────────────────────────────────────

    async def get_todo(self, todo_id: RecordId) -> Record | None:
        if not todo_id:
            raise InvalidArgumentError("Todo id is required", argument="id")
        return await self.store.todos.get_by_id(todo_id)

    async def get_todos(self, filter: Mapping[str, Any] | None = None) -> list[Record]:
        return await self.store.todos.list(filter)

    async def save_todo(self, todo: Mapping[str, Any]) -> Record:
        if _has_id(todo):
            return await self.store.todos.update(todo)
        return await self.store.todos.create(todo)

    async def delete_todo(self, todo_id: RecordId) -> RecordId:
        return await self.store.todos.delete(todo_id)

    # ─── Labels ──────────────────────────────────────────────────

    async def get_label(self, label_id: RecordId) -> Record | None:
        if not label_id:
            raise InvalidArgumentError("Label id is required", argument="id")
        return await self.store.labels.get_by_id(label_id)

    async def get_labels(self, filter: Mapping[str, Any] | None = None) -> list[Record]:
        return await self.store.labels.list(filter)

    async def save_label(self, label: Mapping[str, Any]) -> Record:
        if _has_id(label):
            return await self.store.labels.update(label)
        return await self.store.labels.create(label)

    async def delete_label(self, label_id: RecordId) -> RecordId:
        return await self.store.labels.delete(label_id)
