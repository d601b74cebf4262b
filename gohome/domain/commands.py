"""Command parsing and dispatch for directed messages."""

import sys
from typing import Iterable, Optional

from gohome.config import Spiel
from gohome.domain.membership import RoomMembershipActuator
from gohome.domain.models import Command
from gohome.ports.inbound import InboundEvent
from gohome.ports.outbound import ControllerPort


def _log(msg: str):
    print(msg, file=sys.stderr)


def parse_command(text: str, vocabulary: Iterable[str]) -> Optional[Command]:
    """Match the first whitespace token against ``vocabulary``.

    Returns None when the token is not a known command. The second token,
    if any, becomes the room name.
    """
    tokens = (text or "").split()
    if not tokens:
        return None
    action = tokens[0].lower()
    if action not in {word.lower() for word in vocabulary}:
        return None
    return Command(action=action, room_name=tokens[1] if len(tokens) > 1 else None)


class CommandInterpreter:
    def __init__(self, actuator: RoomMembershipActuator, spiel: Spiel, vocabulary: Iterable[str]):
        self._actuator = actuator
        self._spiel = spiel
        self._vocabulary = tuple(vocabulary)

    @property
    def vocabulary(self):
        """Command words, also used as the `hears` patterns."""
        return self._vocabulary

    async def handle(self, controller: ControllerPort, event: InboundEvent) -> None:
        command = parse_command(event.raw_text, self._vocabulary)
        if command is None:
            _log(f"[commands] unrecognized directed message in {event.channel_id}")
            await controller.reply(event, self._spiel.confused)
            return
        await self._actuator.run(controller, command.action, command.room_name, event)
