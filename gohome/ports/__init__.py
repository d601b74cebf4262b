"""Port interfaces (Hexagonal Architecture)."""

from gohome.ports.inbound import EventCategory, EventType, InboundEvent
from gohome.ports.outbound import (
    ChannelsPort,
    ChatApi,
    ControllerPort,
    Handler,
    ReactionsPort,
    UsersPort,
)

__all__ = [
    "EventCategory",
    "EventType",
    "InboundEvent",
    "ChannelsPort",
    "ChatApi",
    "ControllerPort",
    "Handler",
    "ReactionsPort",
    "UsersPort",
]
