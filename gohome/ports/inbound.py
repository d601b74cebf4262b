"""Inbound port — platform-agnostic event representation."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class EventType(str, Enum):
    """Event names a controller can dispatch."""

    CHANNEL_JOIN = "bot_channel_join"
    GROUP_JOIN = "bot_group_join"
    DIRECT_MESSAGE = "direct_message"
    DIRECT_MENTION = "direct_mention"
    MENTION = "mention"
    AMBIENT = "ambient"
    CONNECTION_OPENED = "connection_opened"
    CONNECTION_CLOSED = "connection_closed"


class EventCategory(str, Enum):
    ROOM_JOINED = "room_joined"
    DIRECTED_MESSAGE = "directed_message"
    AMBIENT_MESSAGE = "ambient_message"
    CONNECTION_OPENED = "connection_opened"
    CONNECTION_CLOSED = "connection_closed"


_CATEGORIES = {
    EventType.CHANNEL_JOIN: EventCategory.ROOM_JOINED,
    EventType.GROUP_JOIN: EventCategory.ROOM_JOINED,
    EventType.DIRECT_MESSAGE: EventCategory.DIRECTED_MESSAGE,
    EventType.DIRECT_MENTION: EventCategory.DIRECTED_MESSAGE,
    EventType.MENTION: EventCategory.DIRECTED_MESSAGE,
    EventType.AMBIENT: EventCategory.AMBIENT_MESSAGE,
    EventType.CONNECTION_OPENED: EventCategory.CONNECTION_OPENED,
    EventType.CONNECTION_CLOSED: EventCategory.CONNECTION_CLOSED,
}

@dataclass(frozen=True)
class InboundEvent:
    """Slack/CLI-agnostic event, created per delivery and never persisted.

    ``timestamp`` keeps the platform's string form (e.g. "1530071118.000184")
    because reactions are addressed by it.
    """

    type: EventType
    timestamp: str = ""
    channel_id: str = ""
    author_id: str = ""
    raw_text: str = ""
    author_utc_offset_seconds: Optional[Union[int, float, str]] = None

    @property
    def category(self) -> EventCategory:
        return _CATEGORIES[self.type]

    @property
    def epoch(self) -> float:
        """Timestamp as epoch seconds (0.0 when missing)."""
        try:
            return float(self.timestamp)
        except (TypeError, ValueError):
            return 0.0
