"""Server configuration and logging setup."""

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

ENV_PREFIX = "ISSUETRACKER_"
TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {ENV_PREFIX}{name}: {raw!r} is not an integer") from None


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class ServerConfig:
    """Settings for running the web server."""

    host: str = "0.0.0.0"
    port: int = 7760
    debug: bool = False
    threads: int = 4
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Load configuration from ``ISSUETRACKER_*`` environment variables.

        Args:
            env: Mapping to read instead of ``os.environ``.

        Raises:
            ValueError: If a numeric variable does not parse.
        """
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            host=env.get(ENV_PREFIX + "HOST") or defaults.host,
            port=_env_int(env, "PORT", defaults.port),
            debug=_env_bool(env, "DEBUG", defaults.debug),
            threads=_env_int(env, "THREADS", defaults.threads),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or defaults.log_level).upper(),
        )

    def override(self, **values: Any) -> "ServerConfig":
        """Return a copy with every non-None value replaced."""
        changes = {key: value for key, value in values.items() if value is not None}
        if "log_level" in changes:
            changes["log_level"] = str(changes["log_level"]).upper()
        return replace(self, **changes)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
