"""Tests for EventRouter binding and dispatch rules."""

from unittest.mock import AsyncMock

import pytest

from gohome.domain.router import EventRouter
from gohome.ports.inbound import EventType, InboundEvent

DIRECTED = [EventType.DIRECT_MESSAGE, EventType.DIRECT_MENTION, EventType.MENTION]


def _event(event_type: EventType, text: str = "") -> InboundEvent:
    return InboundEvent(type=event_type, channel_id="C1", author_id="U1", raw_text=text)


@pytest.mark.asyncio
async def test_on_binding_fires():
    router = EventRouter()
    handler = AsyncMock()
    router.on(EventType.AMBIENT, handler)
    event = _event(EventType.AMBIENT, "hi")

    assert await router.dispatch("ctl", event) == 1
    handler.assert_awaited_once_with("ctl", event)


@pytest.mark.asyncio
async def test_hears_takes_precedence_over_on():
    router = EventRouter()
    heard, default = AsyncMock(), AsyncMock()
    router.hears(["join", "leave"], DIRECTED, heard)
    router.on(EventType.DIRECT_MESSAGE, default)

    await router.dispatch("ctl", _event(EventType.DIRECT_MESSAGE, "JOIN general"))

    heard.assert_awaited_once()
    default.assert_not_awaited()


@pytest.mark.asyncio
async def test_unmatched_dm_falls_to_default():
    router = EventRouter()
    heard, default = AsyncMock(), AsyncMock()
    router.hears(["join", "leave"], DIRECTED, heard)
    router.on(EventType.DIRECT_MESSAGE, default)

    await router.dispatch("ctl", _event(EventType.DIRECT_MESSAGE, "hello"))

    heard.assert_not_awaited()
    default.assert_awaited_once()


@pytest.mark.asyncio
async def test_unmatched_event_without_default_binding_is_dropped():
    router = EventRouter()
    heard = AsyncMock()
    router.hears(["join", "leave"], DIRECTED, heard)

    assert await router.dispatch("ctl", _event(EventType.MENTION, "hey there")) == 0
    heard.assert_not_awaited()


@pytest.mark.asyncio
async def test_ambient_never_reaches_hears():
    router = EventRouter()
    heard, ambient = AsyncMock(), AsyncMock()
    router.hears(["join"], DIRECTED, heard)
    router.on(EventType.AMBIENT, ambient)

    await router.dispatch("ctl", _event(EventType.AMBIENT, "join general"))

    heard.assert_not_awaited()
    ambient.assert_awaited_once()


@pytest.mark.asyncio
async def test_categories_do_not_fall_through():
    router = EventRouter()
    joined = AsyncMock()
    router.on(EventType.CHANNEL_JOIN, joined)

    assert await router.dispatch("ctl", _event(EventType.GROUP_JOIN)) == 0
    joined.assert_not_awaited()


@pytest.mark.asyncio
async def test_duplicate_bindings_both_fire():
    router = EventRouter()
    handler = AsyncMock()
    router.on(EventType.AMBIENT, handler)
    router.on(EventType.AMBIENT, handler)

    assert await router.dispatch("ctl", _event(EventType.AMBIENT)) == 2
    assert handler.await_count == 2
    assert router.binding_count(EventType.AMBIENT) == 2


def test_binding_count_includes_hears():
    router = EventRouter()
    router.hears(["join"], DIRECTED, AsyncMock())
    router.on(EventType.DIRECT_MESSAGE, AsyncMock())
    assert router.binding_count(EventType.DIRECT_MESSAGE) == 2
    assert router.binding_count(EventType.MENTION) == 1
    assert router.binding_count(EventType.AMBIENT) == 0


def test_accepts_plain_event_names():
    router = EventRouter()
    router.on("ambient", AsyncMock())
    assert router.binding_count(EventType.AMBIENT) == 1
