"""Latency — the awaitable pause primitive."""

import asyncio

import pytest

from todomock.infrastructure.latency import Latency


def test_default_delay():
    assert Latency().delay_ms == 200
    assert Latency().seconds == 0.2


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Latency(-1)


async def test_pause_sleeps_for_configured_duration(monkeypatch):
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    await Latency(50)()
    assert slept == [0.05]


async def test_zero_delay_still_yields():
    order = []

    async def other():
        order.append("other")

    task = asyncio.create_task(other())
    await Latency(0)()
    order.append("after-pause")
    await task
    assert order == ["other", "after-pause"]


def test_repr():
    assert repr(Latency(5)) == "Latency(delay_ms=5)"
