"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh, unseeded Store with a zero-delay pause
    - Ids are deterministic (id-1, id-2, ...) where a test asks for them
"""

import itertools
import os
from datetime import datetime, timezone

import pytest

# Never sleep for real and never seed fixtures implicitly in tests
os.environ.setdefault("LATENCY_MS", "0")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from todomock.infrastructure.latency import Latency  # noqa: E402
from todomock.services.store import Store  # noqa: E402

FIXED_NOW = datetime(2019, 2, 7, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return Store(latency=Latency(0))


@pytest.fixture
def counting_ids():
    """id_factory yielding id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def frozen_store(counting_ids):
    """Store with deterministic ids and a fixed clock."""
    return Store(latency=Latency(0), id_factory=counting_ids, clock=lambda: FIXED_NOW)


@pytest.fixture
def fixed_now():
    return FIXED_NOW
