"""Domain layer — pure Python, no framework dependencies."""

from gohome.domain.models import Command, ReactionAdd, ResponsePlan, TextReply
from gohome.domain.lateness import is_late
from gohome.domain.responses import ResponseSelector
from gohome.domain.membership import MembershipActionFailed, RoomMembershipActuator
from gohome.domain.commands import CommandInterpreter, parse_command
from gohome.domain.router import EventRouter
from gohome.domain.supervisor import ConnectionState, ConnectionSupervisor
from gohome.domain.bot import GoHomeBot

__all__ = [
    "Command",
    "ReactionAdd",
    "ResponsePlan",
    "TextReply",
    "is_late",
    "ResponseSelector",
    "MembershipActionFailed",
    "RoomMembershipActuator",
    "CommandInterpreter",
    "parse_command",
    "EventRouter",
    "ConnectionState",
    "ConnectionSupervisor",
    "GoHomeBot",
]
