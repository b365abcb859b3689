"""Seed Data — fixture labels and todos loaded into a fresh Store.

Invariants:
    - Labels are built first; todos reference them by id
    - Completion dates are relative to `now` (or the start of the current/previous week),
      so the fixtures always look recent
    - build_fixtures() returns new dicts on every call
"""

from datetime import datetime, timedelta, timezone

from todomock.core.domain_types import Record
from todomock.core.records import format_instant
from todomock.infrastructure.identifiers import new_id

LABEL_TITLES = ("Blocked", "Tech Debt", "Bug", "Feature", "Upstream")


def start_of_week(moment: datetime) -> datetime:
    """Midnight of the Sunday on or before `moment`."""
    days_since_sunday = (moment.weekday() + 1) % 7
    day = moment - timedelta(days=days_since_sunday)
    return day.replace(hour=0, minute=0, second=0, microsecond=0)


def build_fixtures(now: datetime | None = None) -> tuple[list[Record], list[Record]]:
    """Return (labels, todos) in wire form."""
    now = now or datetime.now(timezone.utc)
    this_week = start_of_week(now)
    last_week = start_of_week(now - timedelta(weeks=1))

    labels = [
        {"id": new_id(), "title": title, "color": None} for title in LABEL_TITLES
    ]
    blocked, tech_debt, bug, _feature, upstream = labels

    def todo(title, label_refs=(), completed_at=None):
        return {
            "id": new_id(),
            "title": title,
            "labels": [label["id"] for label in label_refs],
            "dueDate": None,
            "completed": completed_at is not None,
            "completedAt": format_instant(completed_at),
        }

    todos = [
        todo("Fix Flummox overheating", [bug]),
        todo("Add Whatitz analytics", [blocked, upstream]),
        todo("Wax Ventricals", completed_at=now - timedelta(days=1)),
        todo("Prevent explosions", completed_at=this_week - timedelta(days=3)),
        todo("Bowline Gimbels", [blocked], completed_at=now - timedelta(days=10)),
        todo("Recipricate Splines", completed_at=now - timedelta(days=8)),
        todo("Get pistons detailed", completed_at=this_week - timedelta(days=2)),
        todo("Harness Core", [bug], completed_at=now - timedelta(days=15)),
        todo("Calibrate torques", completed_at=now - timedelta(days=17)),
        todo(
            "Recalibrate Floozel", [tech_debt],
            completed_at=last_week - timedelta(days=20),
        ),
    ]
    return labels, todos
