"""Runtime settings, read from the environment (and a local .env file, if there is one)."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./dig.db"
    log_level: str = "INFO"
    # Clients discover new state by polling getState at this interval.
    poll_interval_seconds: float = 2.0
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DIG_DATABASE_URL", cls.database_url),
            log_level=os.getenv("DIG_LOG_LEVEL", cls.log_level).upper(),
            poll_interval_seconds=float(
                os.getenv("DIG_POLL_INTERVAL_SECONDS", str(cls.poll_interval_seconds))
            ),
            sql_echo=_as_bool(os.getenv("DIG_SQL_ECHO", "false")),
        )


settings = Settings.from_env()


def configure_logging(config: Settings = settings) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
