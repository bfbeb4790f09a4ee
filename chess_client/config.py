"""Client settings, read from the environment."""

import os
from dataclasses import dataclass

from chess_client.errors import ConfigurationError

DEFAULT_AUTHORITY_URL = "http://127.0.0.1:8000"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class Settings:
    authority_url: str = DEFAULT_AUTHORITY_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        url = env.get("CHESS_AUTHORITY_URL") or DEFAULT_AUTHORITY_URL
        raw_timeout = env.get("CHESS_AUTHORITY_TIMEOUT")
        if raw_timeout is None or raw_timeout == "":
            return cls(authority_url=url.rstrip("/"))

        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"CHESS_AUTHORITY_TIMEOUT must be a number, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigurationError("CHESS_AUTHORITY_TIMEOUT must be positive")
        return cls(authority_url=url.rstrip("/"), timeout=timeout)
