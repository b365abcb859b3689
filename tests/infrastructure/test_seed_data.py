"""Seed Data — fixture shape and week arithmetic.

Tests cover:
    - start_of_week lands on Sunday midnight
    - Fixtures reference only seeded labels and stay relative to `now`
    - Seeded Store resolves every todo with its labels
"""

from datetime import datetime, timezone

from todomock.infrastructure.seed_data import LABEL_TITLES, build_fixtures, start_of_week
from todomock.services.store import Store


def test_start_of_week_midweek():
    thursday = datetime(2019, 2, 7, 15, 30, tzinfo=timezone.utc)
    assert start_of_week(thursday) == datetime(2019, 2, 3, tzinfo=timezone.utc)


def test_start_of_week_on_sunday_is_same_day():
    sunday = datetime(2019, 2, 3, 9, 0, tzinfo=timezone.utc)
    assert start_of_week(sunday) == datetime(2019, 2, 3, tzinfo=timezone.utc)


def test_fixture_counts_and_titles(fixed_now):
    labels, todos = build_fixtures(fixed_now)
    assert [lbl["title"] for lbl in labels] == list(LABEL_TITLES)
    assert len(todos) == 10
    assert sum(1 for t in todos if t["completed"]) == 8


def test_completion_dates_are_relative_to_now(fixed_now):
    _, todos = build_fixtures(fixed_now)
    by_title = {t["title"]: t for t in todos}
    assert by_title["Wax Ventricals"]["completedAt"] == "2019-02-06T12:00:00.000Z"
    # Three days before the start of the week of 2019-02-07
    assert by_title["Prevent explosions"]["completedAt"] == "2019-01-31T00:00:00.000Z"
    assert by_title["Fix Flummox overheating"]["completedAt"] is None


def test_todos_reference_seeded_labels(fixed_now):
    labels, todos = build_fixtures(fixed_now)
    label_ids = {lbl["id"] for lbl in labels}
    for todo in todos:
        assert set(todo["labels"]) <= label_ids


def test_fresh_ids_per_call(fixed_now):
    first, _ = build_fixtures(fixed_now)
    second, _ = build_fixtures(fixed_now)
    assert {lbl["id"] for lbl in first}.isdisjoint(lbl["id"] for lbl in second)


async def test_seeded_store_resolves_labels(store, fixed_now):
    store.seed(*build_fixtures(fixed_now))
    todos = await store.todos.list({"title": "Add Whatitz analytics"})
    assert [lbl["title"] for lbl in todos[0]["labels"]] == ["Blocked", "Upstream"]
