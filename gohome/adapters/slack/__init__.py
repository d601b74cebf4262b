"""Slack adapter — socket mode transport and Web API wrappers."""

from gohome.adapters.slack.api import RoomNotFound, SlackApi
from gohome.adapters.slack.controller import SlackController
from gohome.adapters.slack.events import to_inbound

__all__ = ["RoomNotFound", "SlackApi", "SlackController", "to_inbound"]
