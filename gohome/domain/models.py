"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Command:
    """Parsed directed message, e.g. ``join mock-room``."""

    action: str  # lower-cased vocabulary word
    room_name: Optional[str]


@dataclass(frozen=True)
class TextReply:
    body: str


@dataclass(frozen=True)
class ReactionAdd:
    emoji_name: str


ResponsePlan = Union[TextReply, ReactionAdd]
