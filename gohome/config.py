"""Configuration — immutable values built once at startup."""

__version__ = "0.1.0"

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

GO_HOME_MESSAGES: Tuple[str, ...] = (
    "Go home!",
    "Are you homeless?",
    "Stop working!",
    "Why are you here?",
)

CUSTOM_INTEGRATION_STORE = "./db_slack_bot_ci/"
APP_STORE = "./db_slack_bot_a/"


class MissingCredentials(RuntimeError):
    """Raised when the Slack tokens needed to connect are not configured."""


class InvalidConfig(ValueError):
    """Raised when a configured value is outside its allowed range."""


@dataclass(frozen=True)
class Spiel:
    no: str = "I'm sorry. I'm afraid I can't do that"
    entry: str = "Ignore me, just here to make sure no one works late!"
    confused: str = "Sorry, I don't know what you want from me."


@dataclass(frozen=True)
class WorkdayWindow:
    """Local working hours: [start_hour, start_hour + duration_hours)."""

    start_hour: int = 7
    duration_hours: int = 12

    def __post_init__(self):
        if not 0 <= self.start_hour <= 23:
            raise InvalidConfig(f"workday start hour must be 0-23, got {self.start_hour}")
        if not 1 <= self.duration_hours <= 24:
            raise InvalidConfig(f"workday length must be 1-24 hours, got {self.duration_hours}")


@dataclass(frozen=True)
class BotConfig:
    spiel: Spiel = field(default_factory=Spiel)
    vocabulary: Tuple[str, ...] = ("join", "leave")
    window: WorkdayWindow = field(default_factory=WorkdayWindow)
    default_utc_offset_minutes: int = -240  # UTC-4
    reaction_name: str = "go_home"
    reaction_probability: float = 0.4
    go_home_messages: Tuple[str, ...] = GO_HOME_MESSAGES


@dataclass(frozen=True)
class SlackConfig:
    bot_token: str = ""
    app_token: str = ""


@dataclass(frozen=True)
class StorageConfig:
    json_file_store: str = APP_STORE


@dataclass(frozen=True)
class ReconnectPolicy:
    max_attempts: int = 5
    base_delay: float = 1.0
    max_delay: float = 30.0

    def delay_for(self, attempt: int) -> float:
        """Backoff before the given zero-based attempt."""
        return min(self.base_delay * (2 ** attempt), self.max_delay)


@dataclass(frozen=True)
class AppConfig:
    """Typed configuration passed explicitly into every component."""

    bot: BotConfig = field(default_factory=BotConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    reconnect: ReconnectPolicy = field(default_factory=ReconnectPolicy)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create AppConfig from environment variables.

        Raises MissingCredentials when no bot token or no app-level token
        is set, and InvalidConfig when the workday window is out of range.
        """
        env = os.environ if environ is None else environ

        custom_token = env.get("TOKEN", "").strip()
        bot_token = (
            env.get("SLACK_BOT_TOKEN", "").strip()
            or custom_token
            or env.get("SLACK_TOKEN", "").strip()
        )
        app_token = env.get("SLACK_APP_TOKEN", "").strip()
        if not bot_token or not app_token:
            raise MissingCredentials(
                "Set SLACK_BOT_TOKEN (or TOKEN / SLACK_TOKEN) and SLACK_APP_TOKEN "
                "in the environment"
            )

        defaults = BotConfig()
        window = WorkdayWindow(
            start_hour=int(env.get("WORKDAY_START_HOUR", defaults.window.start_hour)),
            duration_hours=int(
                env.get("WORKDAY_LENGTH_HOURS", defaults.window.duration_hours)
            ),
        )
        bot = BotConfig(
            window=window,
            default_utc_offset_minutes=int(
                env.get("DEFAULT_UTC_OFFSET_MINUTES", defaults.default_utc_offset_minutes)
            ),
            reaction_probability=float(
                env.get("REACTION_PROBABILITY", defaults.reaction_probability)
            ),
        )

        policy = ReconnectPolicy()
        reconnect = ReconnectPolicy(
            max_attempts=int(env.get("RECONNECT_MAX_ATTEMPTS", policy.max_attempts)),
            base_delay=float(env.get("RECONNECT_BASE_DELAY", policy.base_delay)),
            max_delay=float(env.get("RECONNECT_MAX_DELAY", policy.max_delay)),
        )

        # Custom integrations and app installs keep separate team stores
        store = CUSTOM_INTEGRATION_STORE if custom_token else APP_STORE

        return cls(
            bot=bot,
            slack=SlackConfig(bot_token=bot_token, app_token=app_token),
            storage=StorageConfig(json_file_store=store),
            reconnect=reconnect,
        )
