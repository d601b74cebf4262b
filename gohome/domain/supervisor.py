"""Connection supervision — reconnect with bounded exponential backoff."""

import asyncio
import sys
from enum import Enum
from typing import Awaitable, Callable, Optional

from gohome.config import ReconnectPolicy


def _log(msg: str):
    print(msg, file=sys.stderr)


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ConnectionSupervisor:
    """Tracks connectivity and rebuilds the controller when it drops.

    ``connect`` builds a fresh controller, registers every listener on it
    and starts it. Rebuilding does not guarantee the transport drops the old
    bindings, so each cycle registers on a new controller.
    """

    def __init__(
        self,
        connect: Callable[[], Awaitable[None]],
        policy: Optional[ReconnectPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._connect = connect
        self._policy = policy or ReconnectPolicy()
        self._sleep = sleep
        self._state = ConnectionState.DISCONNECTED
        self._stopped = asyncio.Event()
        self.gave_up = False

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    async def start(self) -> None:
        """Initial connection. A failure here is treated like a dropped link."""
        await self._reconnect()

    def on_open(self) -> None:
        _log("[supervisor] connected")
        self._state = ConnectionState.CONNECTED

    async def on_close(self) -> None:
        if self._state is not ConnectionState.CONNECTED:
            _log(f"[supervisor] close while {self._state.value}, ignoring")
            return
        _log("[supervisor] connection closed")
        self._state = ConnectionState.DISCONNECTED
        await self._reconnect()

    async def _reconnect(self) -> None:
        for attempt in range(self._policy.max_attempts):
            self._state = ConnectionState.CONNECTING
            if attempt:
                delay = self._policy.delay_for(attempt - 1)
                _log(f"[supervisor] retry {attempt} in {delay:.1f}s")
                await self._sleep(delay)
            try:
                await self._connect()
            except Exception as e:
                _log(f"[supervisor] connect attempt {attempt + 1} failed: {e}")
                continue
            # State moves to CONNECTED when the open event arrives
            return
        self._state = ConnectionState.DISCONNECTED
        self.gave_up = True
        _log(f"[supervisor] giving up after {self._policy.max_attempts} attempts")
        self.stop()

    def stop(self) -> None:
        self._stopped.set()

    async def run(self) -> None:
        """Block until the supervisor is stopped."""
        await self._stopped.wait()
