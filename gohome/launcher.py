"""Launcher for the Go Home bot."""

import asyncio
import sys
from random import Random
from typing import Callable, Optional

from gohome.adapters.slack.controller import SlackController
from gohome.config import AppConfig, MissingCredentials
from gohome.domain.bot import GoHomeBot
from gohome.domain.supervisor import ConnectionSupervisor


def _log(msg: str):
    print(msg, file=sys.stderr)


class BotRunner:
    """Owns the live controller and rebuilds it for the supervisor."""

    def __init__(
        self,
        config: AppConfig,
        rng: Optional[Random] = None,
        controller_factory: Optional[Callable[[AppConfig], SlackController]] = None,
    ):
        self.config = config
        self.bot = GoHomeBot(config.bot, rng or Random())
        self._factory = controller_factory or (
            lambda cfg: SlackController(cfg.slack, cfg.storage)
        )
        self.controller: Optional[SlackController] = None
        self.supervisor = ConnectionSupervisor(self.connect, config.reconnect)
        self.bot.wire(self.supervisor)

    async def connect(self) -> None:
        """Create a controller, register all listeners, start it."""
        old, self.controller = self.controller, None
        if old is not None:
            try:
                await old.close()
            except Exception as e:
                _log(f"[launcher] closing old controller failed: {e}")

        controller = self._factory(self.config)
        self.bot.register_listeners(controller)
        try:
            await controller.start()
        except Exception:
            await controller.close()
            raise
        self.controller = controller

    async def run(self) -> int:
        await self.supervisor.start()
        await self.supervisor.run()
        if self.controller is not None:
            await self.controller.close()
        return 1 if self.supervisor.gave_up else 0


def main():
    try:
        config = AppConfig.from_env()
    except (MissingCredentials, ValueError) as e:
        _log(f"Error: {e}")
        sys.exit(1)
    _log("Launching Go Home bot...")
    sys.exit(asyncio.run(BotRunner(config).run()))


if __name__ == "__main__":
    main()
