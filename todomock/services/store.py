"""Store — owns the label and todo collections and performs every read and write.

Invariants:
    - State lives on a Store instance; there are no module-level collections
    - Payloads are validated before the pause, so a bad payload never mutates anything
    - Every operation awaits the injected pause exactly once
    - Writes commit AFTER the pause: two concurrent updates of one id race, and the
      update whose pause resolves last wins, whatever order they were called in
    - Reads return resolved copies; mutating them never touches Store state
    - delete is idempotent; get_by_id returns None for unknown ids
    - update of an unknown id raises ResourceNotFoundError (no partial records)

Design Decisions:
    - One RecordCollection per entity kind, exposed as store.labels / store.todos
    - No lock, queue or version check across the pause: the race is part of the model
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from todomock.config import Settings
from todomock.core.domain_types import Record, RecordId, ResourceKind
from todomock.core.errors import InvalidArgumentError, ResourceNotFoundError
from todomock.core.filter_engine import compile_filter
from todomock.core.records import (
    StoredLabel,
    StoredTodo,
    merge_label,
    merge_todo,
    normalize_label,
    normalize_todo,
    resolve_label,
    resolve_todo,
)
from todomock.infrastructure.identifiers import new_id
from todomock.infrastructure.latency import Latency, Pause
from todomock.schemas.resources import (
    LabelCreate,
    LabelUpdate,
    TodoCreate,
    TodoUpdate,
    parse_payload,
)

logger = logging.getLogger(__name__)

S = TypeVar("S", StoredLabel, StoredTodo)
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordCollection(ABC, Generic[S]):
    """create / update / delete / get_by_id / list over one keyed collection."""

    resource: str
    create_model: type
    update_model: type

    def __init__(self, store: "Store", records: dict[RecordId, S]):
        self._store = store
        self._records = records

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def ids(self) -> list[RecordId]:
        return list(self._records)

    # ─── Entity-specific hooks ───────────────────────────────────

    @abstractmethod
    def _build(self, record_id: RecordId, changes: Mapping[str, Any]) -> S:
        pass

    @abstractmethod
    def _merge(self, stored: S, changes: Mapping[str, Any]) -> S:
        pass

    @abstractmethod
    def _resolve(self, stored: S) -> Record:
        pass

    def insert(self, changes: dict[str, Any]) -> S:
        """Build and store a record from validated creation fields. No pause."""
        record_id = changes.pop("id", None) or self._store.id_factory()
        stored = self._build(record_id, changes)
        self._records[record_id] = stored
        return stored

    # ─── Operations ──────────────────────────────────────────────

    async def create(self, data: Any) -> Record:
        payload = parse_payload(self.create_model, data, self.resource)
        changes = payload.supplied_fields()

        await self._store.pause()

        stored = self.insert(changes)
        logger.info(
            f"Created {self.resource} {stored.id}",
            extra={"resource": self.resource, "record_id": stored.id},
        )
        return self._resolve(stored)

    async def update(self, data: Any) -> Record:
        if isinstance(data, Mapping) and not data.get("id"):
            raise InvalidArgumentError(
                f"{self.resource} id is required for update", argument="id",
            )
        payload = parse_payload(self.update_model, data, self.resource)
        changes = payload.supplied_fields()
        record_id = RecordId(changes.pop("id"))

        await self._store.pause()

        stored = self._records.get(record_id)
        if stored is None:
            raise ResourceNotFoundError(self.resource, record_id)
        merged = self._merge(stored, changes)
        self._records[record_id] = merged
        logger.info(
            f"Updated {self.resource} {record_id}",
            extra={"resource": self.resource, "record_id": record_id},
        )
        return self._resolve(merged)

    async def delete(self, record_id: RecordId) -> RecordId:
        if not record_id:
            raise InvalidArgumentError(
                f"{self.resource} id is required for delete", argument="id",
            )

        await self._store.pause()

        removed = self._records.pop(record_id, None)
        logger.info(
            f"Deleted {self.resource} {record_id}"
            + ("" if removed is not None else " (already absent)"),
            extra={"resource": self.resource, "record_id": record_id},
        )
        return record_id

    async def get_by_id(self, record_id: RecordId) -> Record | None:
        await self._store.pause()

        stored = self._records.get(record_id)
        return self._resolve(stored) if stored is not None else None

    # NB: keep last, the name shadows the builtin for annotations below it
    async def list(self, filter: Mapping[str, Any] | None = None) -> list[Record]:
        """All resolved records, or those matching filter (evaluated on the resolved form)."""
        predicate = compile_filter(filter) if filter is not None else None

        await self._store.pause()

        records = [self._resolve(stored) for stored in self._records.values()]
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]


class LabelCollection(RecordCollection[StoredLabel]):
    resource = "Label"
    create_model = LabelCreate
    update_model = LabelUpdate

    def _build(self, record_id, changes):
        return normalize_label(record_id, changes)

    def _merge(self, stored, changes):
        return merge_label(stored, changes)

    def _resolve(self, stored):
        return resolve_label(stored)


class TodoCollection(RecordCollection[StoredTodo]):
    resource = "Todo"
    create_model = TodoCreate
    update_model = TodoUpdate

    def _build(self, record_id, changes):
        return normalize_todo(record_id, changes, self._store.clock())

    def _merge(self, stored, changes):
        return merge_todo(stored, changes, self._store.clock())

    def _resolve(self, stored):
        # Labels are looked up at read time, so renames show through
        return resolve_todo(stored, self._store.label_records)


class Store:
    """In-memory backend: two collections, one pause primitive, one id source."""

    def __init__(
        self,
        latency: Pause | None = None,
        id_factory: Callable[[], RecordId] = new_id,
        clock: Clock = utc_now,
    ):
        self.pause: Pause = latency if latency is not None else Latency()
        self.id_factory = id_factory
        self.clock = clock
        self.label_records: dict[RecordId, StoredLabel] = {}
        self.todo_records: dict[RecordId, StoredTodo] = {}
        self.labels = LabelCollection(self, self.label_records)
        self.todos = TodoCollection(self, self.todo_records)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        """Store wired with the configured latency, seeded when enabled."""
        store = cls(latency=Latency(settings.latency_ms))
        if settings.seed_on_startup:
            from todomock.infrastructure.seed_data import build_fixtures
            store.seed(*build_fixtures())
        return store

    def collection(self, kind: ResourceKind) -> RecordCollection:
        if kind is ResourceKind.LABELS:
            return self.labels
        return self.todos

    def seed(
        self, labels: Iterable[Mapping[str, Any]], todos: Iterable[Mapping[str, Any]],
    ) -> None:
        """Load fixture records synchronously, without pausing."""
        for collection, rows in ((self.labels, labels), (self.todos, todos)):
            for raw in rows:
                payload = parse_payload(collection.create_model, raw, collection.resource)
                collection.insert(payload.supplied_fields())
        logger.info(
            f"Seeded {len(self.labels)} labels and {len(self.todos)} todos",
        )
