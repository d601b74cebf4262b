"""Slack controller — socket mode transport feeding the EventRouter.

Every handler receives this controller as its first argument, giving it
``reply()`` and the ``api`` namespace (channels, users, reactions).
"""

import asyncio
import sys
from typing import Iterable, Optional

from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse
from slack_sdk.web.async_client import AsyncWebClient

from gohome.adapters.slack.api import SlackApi
from gohome.adapters.slack.events import to_inbound
from gohome.adapters.storage.json_store import TeamStore
from gohome.config import SlackConfig, StorageConfig
from gohome.domain.router import EventRouter
from gohome.ports.inbound import EventType, InboundEvent
from gohome.ports.outbound import Handler


def _log(msg: str):
    print(msg, file=sys.stderr)


class SlackController:
    """ControllerPort implementation over slack_sdk's aiohttp socket mode client.

    The socket client's own auto-reconnect is disabled: a lost socket is
    reported once as a ``connection_closed`` event and the
    ConnectionSupervisor builds a new controller. A socket counts as lost when
    Slack sends a CLOSE frame, when the websocket reports an ERROR, or when a
    liveness poll finds ``is_connected()`` false (dead session, failed
    ping/pong), which the client itself never reports.
    """

    def __init__(
        self,
        slack: SlackConfig,
        storage: StorageConfig,
        web_client: Optional[AsyncWebClient] = None,
        socket_client: Optional[SocketModeClient] = None,
        team_store: Optional[TeamStore] = None,
        liveness_interval: float = 5.0,
        connect_timeout: float = 30.0,
    ):
        self.storage = storage
        self.router = EventRouter()
        self.web = web_client or AsyncWebClient(token=slack.bot_token)
        self.api = SlackApi(self.web)
        self.socket = socket_client or SocketModeClient(
            app_token=slack.app_token,
            web_client=self.web,
            auto_reconnect_enabled=False,
        )
        self.socket.socket_mode_request_listeners.append(self._on_request)
        self.socket.on_close_listeners.append(self._on_socket_close)
        self.socket.on_error_listeners.append(self._on_socket_error)
        self._team_store = team_store
        self._liveness_interval = liveness_interval
        self._connect_timeout = connect_timeout
        self._closed = False
        self._close_task: Optional[asyncio.Task] = None
        self._watch_task: Optional[asyncio.Task] = None
        self.bot_user_id = ""
        self.team_id = ""

    # -- Registration (delegates to the router) --

    def on(self, event_type: EventType, handler: Handler) -> None:
        self.router.on(event_type, handler)

    def hears(
        self,
        patterns: Iterable[str],
        event_types: Iterable[EventType],
        handler: Handler,
    ) -> None:
        self.router.hears(patterns, event_types, handler)

    # -- Outbound --

    async def reply(self, event: InboundEvent, text: str) -> None:
        await self.web.chat_postMessage(channel=event.channel_id, text=text)

    # -- Lifecycle --

    async def start(self) -> None:
        """Identify the bot, record the team, open the socket.

        ``SocketModeClient.connect()`` retries on its own and never raises, so
        it is bounded by ``connect_timeout``; the timeout propagates to the
        supervisor as a failed attempt.
        """
        auth = await self.web.auth_test()
        self.bot_user_id = auth.get("user_id", "")
        self.team_id = auth.get("team_id", "")
        store = self._team_store or TeamStore(self.storage.json_file_store)
        store.save_team({
            "id": self.team_id,
            "bot_user_id": self.bot_user_id,
            "url": auth.get("url", ""),
        })
        _log(f"[slack] connecting as {self.bot_user_id} (team {self.team_id})")
        await asyncio.wait_for(self.socket.connect(), timeout=self._connect_timeout)
        self.watch_liveness()
        await self.emit(InboundEvent(type=EventType.CONNECTION_OPENED))

    def watch_liveness(self) -> asyncio.Task:
        """Start polling the socket; a dead one is reported as lost."""
        if self._watch_task is None or self._watch_task.done():
            self._watch_task = asyncio.get_running_loop().create_task(self._watch())
        return self._watch_task

    async def close(self) -> None:
        """Close without reporting a lost connection."""
        self._closed = True
        watch = self._watch_task
        if watch is not None and watch is not asyncio.current_task():
            watch.cancel()
        await self.socket.close()

    # -- Inbound --

    async def emit(self, event: InboundEvent) -> None:
        """Dispatch one event. Handler failures are logged, never raised."""
        try:
            await self.router.dispatch(self, event)
        except Exception as e:
            _log(f"[slack] handler error on {event.type.value}/{event.category.value}: {e}")

    async def _on_request(self, client: SocketModeClient, req: SocketModeRequest) -> None:
        # Ack first so Slack does not redeliver
        await client.send_socket_mode_response(SocketModeResponse(envelope_id=req.envelope_id))
        if req.type != "events_api":
            return
        payload = (req.payload or {}).get("event") or {}
        event = to_inbound(payload, self.bot_user_id)
        if event is None:
            return
        await self.emit(event)

    async def _on_socket_close(self, *args) -> None:
        self._report_lost("socket closed")

    async def _on_socket_error(self, message=None) -> None:
        self._report_lost(f"socket error: {getattr(message, 'data', message)}")

    async def _watch(self) -> None:
        while not self._closed:
            await asyncio.sleep(self._liveness_interval)
            if self._closed:
                return
            if not await self.socket.is_connected():
                self._report_lost("socket no longer connected")
                return

    def _report_lost(self, reason: str) -> None:
        if self._closed:
            return
        self._closed = True
        _log(f"[slack] {reason}")
        # Run outside the socket's receive loop; the supervisor tears it down
        self._close_task = asyncio.get_running_loop().create_task(
            self.emit(InboundEvent(type=EventType.CONNECTION_CLOSED))
        )
        self._close_task.add_done_callback(_log_task_failure)


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        _log("[slack] connection_closed dispatch cancelled")
        return
    exc = task.exception()
    if exc is not None:
        _log(f"[slack] connection_closed dispatch failed: {exc}")
