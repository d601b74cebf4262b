"""GoHomeBot — event handlers and listener registration, no Slack dependency.

Handles:
- Room joins: announce the bot in the new room
- Directed messages: ``join <room>`` / ``leave <room>`` commands
- Ambient chatter: nudge people posting outside their local workday
- Connection open/close: hand over to the ConnectionSupervisor
"""

import sys
from random import Random
from typing import Optional

from gohome.config import BotConfig
from gohome.domain.commands import CommandInterpreter
from gohome.domain.lateness import is_late
from gohome.domain.membership import RoomMembershipActuator
from gohome.domain.models import ReactionAdd, TextReply
from gohome.domain.responses import ResponseSelector
from gohome.domain.supervisor import ConnectionSupervisor
from gohome.ports.inbound import EventType, InboundEvent
from gohome.ports.outbound import ControllerPort


def _log(msg: str):
    print(msg, file=sys.stderr)


DIRECTED_EVENTS = (EventType.DIRECT_MESSAGE, EventType.DIRECT_MENTION, EventType.MENTION)


class GoHomeBot:
    """Pure bot logic — testable with a mock controller."""

    def __init__(
        self,
        config: BotConfig,
        rng: Random,
        supervisor: Optional[ConnectionSupervisor] = None,
    ):
        self.config = config
        self.selector = ResponseSelector(
            rng,
            reaction_probability=config.reaction_probability,
            corpus=config.go_home_messages,
            reaction_name=config.reaction_name,
        )
        self.actuator = RoomMembershipActuator(apology=config.spiel.no)
        self.interpreter = CommandInterpreter(
            self.actuator, config.spiel, config.vocabulary
        )
        self._supervisor = supervisor

    def wire(self, supervisor: ConnectionSupervisor):
        """Attach the supervisor once it exists (it needs our connect callback)."""
        self._supervisor = supervisor

    @property
    def is_connected(self) -> bool:
        return bool(self._supervisor and self._supervisor.is_connected)

    def register_listeners(self, controller: ControllerPort) -> None:
        """Bind every event handler on ``controller``.

        Not idempotent: calling it twice on one controller binds twice.
        """
        controller.on(EventType.CONNECTION_OPENED, self.on_connection_open)
        controller.on(EventType.CONNECTION_CLOSED, self.on_connection_close)
        controller.on(EventType.CHANNEL_JOIN, self.handle_new_room)
        controller.on(EventType.GROUP_JOIN, self.handle_new_room)
        controller.hears(self.interpreter.vocabulary, DIRECTED_EVENTS, self.handle_dm)
        # Unmatched directed messages get the confused reply
        for event_type in DIRECTED_EVENTS:
            controller.on(event_type, self.handle_dm)
        controller.on(EventType.AMBIENT, self.handle_chatter)

    # -- Connectivity --

    async def on_connection_open(self, controller: ControllerPort, event: InboundEvent) -> None:
        if self._supervisor:
            self._supervisor.on_open()

    async def on_connection_close(self, controller: ControllerPort, event: InboundEvent) -> None:
        if self._supervisor:
            await self._supervisor.on_close()

    # -- Rooms and commands --

    async def handle_new_room(self, controller: ControllerPort, event: InboundEvent) -> None:
        await controller.reply(event, self.config.spiel.entry)

    async def handle_dm(self, controller: ControllerPort, event: InboundEvent) -> None:
        await self.interpreter.handle(controller, event)

    # -- Chatter --

    def is_late(self, event: InboundEvent, utc_offset_seconds=None) -> bool:
        return is_late(
            event.epoch,
            utc_offset_seconds,
            self.config.window,
            self.config.default_utc_offset_minutes,
        )

    async def lookup_offset(self, controller: ControllerPort, event: InboundEvent):
        """Author's UTC offset in seconds, or None to use the default zone."""
        if event.author_utc_offset_seconds is not None:
            return event.author_utc_offset_seconds
        try:
            response = await controller.api.users.info(event.author_id)
        except Exception as e:
            _log(f"[bot] users.info failed for {event.author_id}: {e}")
            return None
        return ((response or {}).get("user") or {}).get("tz_offset")

    async def handle_chatter(self, controller: ControllerPort, event: InboundEvent) -> None:
        offset = await self.lookup_offset(controller, event)
        if not self.is_late(event, offset) or self.selector.is_tired():
            return

        plan = self.selector.select()
        if isinstance(plan, ReactionAdd):
            try:
                await controller.api.reactions.add({
                    "timestamp": event.timestamp,
                    "channel": event.channel_id,
                    "name": plan.emoji_name,
                })
                return
            except Exception as e:
                _log(f"[bot] reaction failed in {event.channel_id}: {e}")
                plan = TextReply(self.selector.generate_go_home())

        await controller.reply(event, plan.body)
