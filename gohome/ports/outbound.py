"""Outbound ports — interfaces the handlers call through the controller."""

from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Protocol, runtime_checkable

from gohome.ports.inbound import EventType, InboundEvent

Handler = Callable[[Any, InboundEvent], Awaitable[None]]


@runtime_checkable
class ChannelsPort(Protocol):
    """Room membership operations. Payload is ``{"name": room_name}``."""

    async def join(self, payload: Dict[str, Optional[str]]) -> None: ...
    async def leave(self, payload: Dict[str, Optional[str]]) -> None: ...


@runtime_checkable
class UsersPort(Protocol):
    """User directory. Returns ``{"user": {"tz_offset": seconds, ...}}``."""

    async def info(self, user_id: str) -> Dict[str, Any]: ...


@runtime_checkable
class ReactionsPort(Protocol):
    """Payload is ``{"timestamp": ts, "channel": id, "name": emoji}``."""

    async def add(self, payload: Dict[str, str]) -> None: ...


@runtime_checkable
class ChatApi(Protocol):
    channels: ChannelsPort
    users: UsersPort
    reactions: ReactionsPort


@runtime_checkable
class ControllerPort(Protocol):
    """What every handler receives as its first argument."""

    api: ChatApi

    def on(self, event_type: EventType, handler: Handler) -> None: ...

    def hears(
        self,
        patterns: Iterable[str],
        event_types: Iterable[EventType],
        handler: Handler,
    ) -> None: ...

    async def reply(self, event: InboundEvent, text: str) -> None: ...
