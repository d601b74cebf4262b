"""Slack Web API wrappers implementing the outbound ports."""

import re
from typing import Any, Dict, Optional

from slack_sdk.web.async_client import AsyncWebClient

# <#C12345|general> channel links
_CHANNEL_LINK_RE = re.compile(r"^<#([CG][A-Z0-9]+)(?:\|([^>]*))?>$")


class RoomNotFound(LookupError):
    pass


class SlackChannels:
    """ChannelsPort over conversations.* — rooms are addressed by name."""

    def __init__(self, client: AsyncWebClient):
        self._client = client

    async def resolve(self, name: Optional[str]) -> str:
        """Map a room name, ``#name`` or channel link to a channel ID."""
        if not name:
            raise RoomNotFound("no room name given")
        link = _CHANNEL_LINK_RE.match(name)
        if link:
            return link.group(1)
        wanted = name.lstrip("#").lower()

        cursor = None
        while True:
            resp = await self._client.conversations_list(
                types="public_channel,private_channel",
                exclude_archived=True,
                limit=1000,
                cursor=cursor,
            )
            for chan in resp.get("channels", []) or []:
                if chan.get("name", "").lower() == wanted:
                    return chan["id"]
            cursor = (resp.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break
        raise RoomNotFound(f"no room named {name!r}")

    async def join(self, payload: Dict[str, Optional[str]]) -> None:
        channel = await self.resolve(payload.get("name"))
        await self._client.conversations_join(channel=channel)

    async def leave(self, payload: Dict[str, Optional[str]]) -> None:
        channel = await self.resolve(payload.get("name"))
        await self._client.conversations_leave(channel=channel)


class SlackUsers:
    def __init__(self, client: AsyncWebClient):
        self._client = client

    async def info(self, user_id: str) -> Dict[str, Any]:
        resp = await self._client.users_info(user=user_id)
        return resp.data


class SlackReactions:
    def __init__(self, client: AsyncWebClient):
        self._client = client

    async def add(self, payload: Dict[str, str]) -> None:
        await self._client.reactions_add(
            channel=payload["channel"],
            timestamp=payload["timestamp"],
            name=payload["name"],
        )


class SlackApi:
    """The ``controller.api`` namespace handed to every handler."""

    def __init__(self, client: AsyncWebClient):
        self.client = client
        self.channels = SlackChannels(client)
        self.users = SlackUsers(client)
        self.reactions = SlackReactions(client)
