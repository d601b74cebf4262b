"""Room membership — join/leave through the chat API."""

import sys
from typing import Optional

from gohome.ports.inbound import InboundEvent
from gohome.ports.outbound import ControllerPort

JOIN = "join"
LEAVE = "leave"


def _log(msg: str):
    print(msg, file=sys.stderr)


class MembershipActionFailed(Exception):
    def __init__(self, action: str, room_name: Optional[str], cause: BaseException):
        super().__init__(f"{action} {room_name!r} failed: {cause}")
        self.action = action
        self.room_name = room_name
        self.cause = cause


class RoomMembershipActuator:
    """Performs join/leave. Only failures are visible to the requester."""

    def __init__(self, apology: str):
        self._apology = apology

    async def run(
        self,
        controller: ControllerPort,
        action: str,
        room_name: Optional[str],
        event: InboundEvent,
    ) -> None:
        try:
            await self._perform(controller, action, room_name)
        except MembershipActionFailed as e:
            _log(f"[membership] {e}")
            await controller.reply(event, self._apology)

    async def _perform(self, controller: ControllerPort, action: str, room_name: Optional[str]):
        payload = {"name": room_name}
        channels = controller.api.channels
        try:
            if action.lower() == LEAVE:
                await channels.leave(payload)
            else:
                await channels.join(payload)
        except Exception as e:
            raise MembershipActionFailed(action, room_name, e) from e
