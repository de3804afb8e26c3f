# storefront/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

# .env values never override variables already set in the environment
load_dotenv(override=False)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

# Connection pool bounds and driver timeouts (seconds)
POOL_SIZE = 5
MAX_OVERFLOW = 10
CONNECT_TIMEOUT = 10
COMMAND_TIMEOUT = 30


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"DB_PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"DB_PORT out of range: {port}")
    return port


@dataclass(frozen=True)
class Settings:
    """Store connection settings.

    ``database_url`` wins over the individual parts when it is set, which is
    how containers and the test suite point the service at another store.
    """

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    database: str = "storefront"
    encrypt: bool = False
    database_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("DB_HOST", cls.host),
            port=_parse_port(os.getenv("DB_PORT", str(cls.port))),
            user=os.getenv("DB_USER", cls.user),
            password=os.getenv("DB_PASSWORD", cls.password),
            database=os.getenv("DB_NAME", cls.database),
            encrypt=_parse_bool("DB_ENCRYPT", os.getenv("DB_ENCRYPT", "false")),
            database_url=os.getenv("DATABASE_URL") or None,
        )

    @property
    def url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def engine_options(self) -> dict:
        """Keyword arguments for ``create_async_engine`` matching the URL's driver."""
        url = self.url
        if url.get_backend_name() == "sqlite":
            return {}

        options = {
            "pool_size": POOL_SIZE,
            "max_overflow": MAX_OVERFLOW,
            "pool_pre_ping": True,
        }
        if url.get_driver_name() == "asyncpg":
            connect_args = {"timeout": CONNECT_TIMEOUT, "command_timeout": COMMAND_TIMEOUT}
            if self.encrypt:
                connect_args["ssl"] = "require"
            options["connect_args"] = connect_args
        return options


def get_settings() -> Settings:
    return Settings.from_env()
