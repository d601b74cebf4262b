"""Tests for Slack Web API wrappers with a mocked AsyncWebClient."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from gohome.adapters.slack.api import RoomNotFound, SlackApi


def _make_client(*pages) -> MagicMock:
    client = MagicMock()
    client.conversations_list = AsyncMock(side_effect=list(pages))
    client.conversations_join = AsyncMock()
    client.conversations_leave = AsyncMock()
    client.users_info = AsyncMock()
    client.reactions_add = AsyncMock()
    return client


PAGE = {
    "channels": [{"id": "C1", "name": "general"}, {"id": "C2", "name": "mock-room"}],
    "response_metadata": {"next_cursor": ""},
}


@pytest.mark.asyncio
async def test_join_resolves_name():
    client = _make_client(PAGE)
    await SlackApi(client).channels.join({"name": "mock-room"})
    client.conversations_join.assert_awaited_once_with(channel="C2")


@pytest.mark.asyncio
async def test_leave_resolves_hash_name_case_insensitively():
    client = _make_client(PAGE)
    await SlackApi(client).channels.leave({"name": "#Mock-Room"})
    client.conversations_leave.assert_awaited_once_with(channel="C2")


@pytest.mark.asyncio
async def test_channel_link_skips_lookup():
    client = _make_client()
    await SlackApi(client).channels.join({"name": "<#C999|random>"})
    client.conversations_list.assert_not_awaited()
    client.conversations_join.assert_awaited_once_with(channel="C999")


@pytest.mark.asyncio
async def test_paginates():
    first = {"channels": [{"id": "C1", "name": "general"}], "response_metadata": {"next_cursor": "abc"}}
    second = {"channels": [{"id": "C7", "name": "late-night"}], "response_metadata": {"next_cursor": ""}}
    client = _make_client(first, second)

    await SlackApi(client).channels.join({"name": "late-night"})

    assert client.conversations_list.await_count == 2
    assert client.conversations_list.await_args_list[1].kwargs["cursor"] == "abc"
    client.conversations_join.assert_awaited_once_with(channel="C7")


@pytest.mark.asyncio
@pytest.mark.parametrize("name", [None, "", "nowhere"])
async def test_unknown_room_raises(name):
    client = _make_client(PAGE)
    with pytest.raises(RoomNotFound):
        await SlackApi(client).channels.join({"name": name})
    client.conversations_join.assert_not_awaited()


@pytest.mark.asyncio
async def test_users_info_returns_payload():
    client = _make_client()
    client.users_info.return_value = MagicMock(data={"ok": True, "user": {"tz_offset": -14400}})

    info = await SlackApi(client).users.info("U1")

    client.users_info.assert_awaited_once_with(user="U1")
    assert info["user"]["tz_offset"] == -14400


@pytest.mark.asyncio
async def test_reactions_add():
    client = _make_client()
    await SlackApi(client).reactions.add({"timestamp": "1.2", "channel": "C1", "name": "go_home"})
    client.reactions_add.assert_awaited_once_with(channel="C1", timestamp="1.2", name="go_home")
