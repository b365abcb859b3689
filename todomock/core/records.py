"""Records — normalized (stored) and resolved (read) forms of labels and todos.

Invariants:
    - Stored todos reference labels by bare id only; a dangling id is tolerated
    - resolve_* always builds new dicts: callers can never reach Store state through them
    - Instants are stored as aware UTC datetimes and leave as ISO strings with a `Z` suffix
    - Completion rule: without an explicit completedAt, a not-completed todo has none,
      and every write leaving a todo completed stamps it with `now`

Design Decisions:
    - Dataclasses for stored forms, plain dicts for resolved forms (the wire shape)
    - `now` is a parameter, never read here, so every function stays deterministic
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping

from todomock.core.domain_types import Record, RecordId


@dataclass
class StoredLabel:
    id: RecordId
    title: str
    color: str | None = None


@dataclass
class StoredTodo:
    id: RecordId
    title: str
    completed: bool = False
    labels: list[RecordId] = field(default_factory=list)
    due_date: datetime | None = None
    completed_at: datetime | None = None


# Wire name -> StoredTodo attribute
TODO_WIRE_FIELDS = {
    "id": "id",
    "title": "title",
    "completed": "completed",
    "labels": "labels",
    "dueDate": "due_date",
    "completedAt": "completed_at",
}


# ─── Instants ────────────────────────────────────────────────────

def to_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_instant(value: datetime | None) -> str | None:
    """2019-02-05T12:50:00.000Z"""
    if value is None:
        return None
    text = to_utc(value).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def derive_completed_at(completed: bool, now: datetime) -> datetime | None:
    """Completion timestamp when the caller did not supply one: every completed write restamps."""
    return now if completed else None


def unique_ids(ids: list[RecordId]) -> list[RecordId]:
    """Drop repeated label references, keeping first-seen order."""
    return list(dict.fromkeys(ids))


# ─── Labels ──────────────────────────────────────────────────────

def normalize_label(record_id: RecordId, changes: Mapping[str, Any]) -> StoredLabel:
    return StoredLabel(
        id=record_id,
        title=changes["title"],
        color=changes.get("color") or None,
    )


def merge_label(stored: StoredLabel, changes: Mapping[str, Any]) -> StoredLabel:
    """Shallow merge: only supplied fields overwrite."""
    updates = {k: v for k, v in changes.items() if k in ("title", "color")}
    if "color" in updates:
        updates["color"] = updates["color"] or None
    return replace(stored, **updates)


def resolve_label(label: StoredLabel) -> Record:
    """Snapshot copy of a label (asdict copies recursively)."""
    return asdict(label)


# ─── Todos ───────────────────────────────────────────────────────

def normalize_todo(
    record_id: RecordId, changes: Mapping[str, Any], now: datetime,
) -> StoredTodo:
    """Build a stored todo from creation input (wire field names)."""
    completed = bool(changes.get("completed") or False)
    if "completedAt" in changes:
        completed_at = to_utc(changes["completedAt"])
    else:
        completed_at = derive_completed_at(completed, now)
    return StoredTodo(
        id=record_id,
        title=changes["title"],
        completed=completed,
        labels=unique_ids(list(changes.get("labels") or [])),
        due_date=to_utc(changes.get("dueDate")),
        completed_at=completed_at,
    )


def merge_todo(
    stored: StoredTodo, changes: Mapping[str, Any], now: datetime,
) -> StoredTodo:
    """Shallow-merge supplied wire fields over a stored todo, then re-derive completedAt."""
    updates: dict[str, Any] = {}
    for wire_name, value in changes.items():
        attr = TODO_WIRE_FIELDS.get(wire_name)
        if attr is None or attr == "id":
            continue
        if attr == "labels":
            value = unique_ids(list(value or []))
        elif attr in ("due_date", "completed_at"):
            value = to_utc(value)
        updates[attr] = value

    merged = replace(stored, **updates)
    if "completedAt" not in changes:
        merged.completed_at = derive_completed_at(merged.completed, now)
    return merged


def resolve_todo(
    todo: StoredTodo, labels: Mapping[RecordId, StoredLabel],
) -> Record:
    """Swap label ids for copies of the current labels; dangling ids are omitted."""
    return {
        "id": todo.id,
        "title": todo.title,
        "completed": todo.completed,
        "labels": [
            resolve_label(labels[label_id])
            for label_id in todo.labels
            if label_id in labels
        ],
        "dueDate": format_instant(todo.due_date),
        "completedAt": format_instant(todo.completed_at),
    }
