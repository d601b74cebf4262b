"""Go Home — a Slack bot that tells people to stop working late."""

from gohome.config import (
    AppConfig,
    BotConfig,
    InvalidConfig,
    MissingCredentials,
    WorkdayWindow,
    __version__,
)
from gohome.domain.bot import GoHomeBot
from gohome.domain.lateness import is_late

__all__ = [
    "__version__",
    "AppConfig",
    "BotConfig",
    "InvalidConfig",
    "MissingCredentials",
    "WorkdayWindow",
    "GoHomeBot",
    "is_late",
]
