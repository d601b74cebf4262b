"""Slack Events API payloads -> InboundEvent.

Pure translation; no network calls.
"""

import re
from typing import Any, Dict, Optional

from gohome.ports.inbound import EventType, InboundEvent

# Slack mentions format: <@U12345678>
MENTION_RE = re.compile(r"<@([UW][A-Z0-9]+)(?:\|[^>]*)?>")

_JOIN_TYPES = {
    "channel_joined": EventType.CHANNEL_JOIN,
    "group_joined": EventType.GROUP_JOIN,
}


def mentions(text: str, user_id: str) -> bool:
    return bool(user_id) and any(m == user_id for m in MENTION_RE.findall(text or ""))


def strip_leading_mention(text: str, user_id: str) -> Optional[str]:
    """Return text without a leading ``<@bot>`` (and ``:``), or None if absent."""
    pattern = rf"^\s*<@{re.escape(user_id)}(?:\|[^>]*)?>[:,]?\s*"
    stripped, count = re.subn(pattern, "", text or "", count=1)
    return stripped if count else None


def _is_human_message(event: Dict[str, Any], bot_user_id: str) -> bool:
    if event.get("bot_id") or event.get("subtype"):
        return False
    user = event.get("user", "")
    return bool(user) and user != bot_user_id


def _message(event: Dict[str, Any], event_type: EventType, text: str) -> InboundEvent:
    return InboundEvent(
        type=event_type,
        timestamp=str(event.get("ts", "")),
        channel_id=event.get("channel", ""),
        author_id=event.get("user", ""),
        raw_text=text,
    )


def to_inbound(event: Dict[str, Any], bot_user_id: str) -> Optional[InboundEvent]:
    """Classify a Slack event, or return None if the bot ignores it.

    - member_joined_channel for the bot user: group join for private
      channels (channel_type "G"), channel join otherwise
    - app_mention: direct_mention when the mention leads the text, else mention
    - message in an IM: direct_message
    - other channel messages: ambient, unless they mention the bot, in which
      case the accompanying app_mention event covers them
    """
    event_type = event.get("type", "")

    if event_type == "member_joined_channel":
        if event.get("user") != bot_user_id:
            return None
        join_type = EventType.GROUP_JOIN if event.get("channel_type") == "G" else EventType.CHANNEL_JOIN
        return InboundEvent(
            type=join_type,
            timestamp=str(event.get("event_ts", "")),
            channel_id=event.get("channel", ""),
            author_id=event.get("inviter", ""),
        )

    if event_type in _JOIN_TYPES:
        channel = event.get("channel") or {}
        channel_id = channel.get("id", "") if isinstance(channel, dict) else str(channel)
        return InboundEvent(
            type=_JOIN_TYPES[event_type],
            timestamp=str(event.get("event_ts", "")),
            channel_id=channel_id,
        )

    if event_type == "app_mention":
        if not _is_human_message(event, bot_user_id):
            return None
        text = event.get("text", "")
        stripped = strip_leading_mention(text, bot_user_id)
        if stripped is not None:
            return _message(event, EventType.DIRECT_MENTION, stripped)
        return _message(event, EventType.MENTION, text)

    if event_type == "message":
        if not _is_human_message(event, bot_user_id):
            return None
        text = event.get("text", "")
        if event.get("channel_type") == "im":
            return _message(event, EventType.DIRECT_MESSAGE, text)
        if mentions(text, bot_user_id):
            return None
        return _message(event, EventType.AMBIENT, text)

    return None
