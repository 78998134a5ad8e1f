from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

CHAIN_MIN_SIZE = 5
FLOOD_MIN_SIZE = 4
MIN_PALETTE = 3

_TRUTHY = ("1", "true", "yes", "on")


def _env_int(env: Mapping[str, str], name: str, default: Optional[int], minimum: int) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime knobs, read from COLORWARS_* environment variables."""
    chain_size: int = 9
    flood_size: int = 10
    palette: int = 6
    bot_delay_ms: int = 450
    max_explosions: Optional[int] = None  # None: 64 explosions per cell
    log_level: str = "INFO"
    debug: bool = False
    port: int = 5000

    @property
    def bot_delay(self) -> float:
        return self.bot_delay_ms / 1000.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        env = os.environ if env is None else env
        level = env.get("COLORWARS_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"COLORWARS_LOG_LEVEL is not a logging level: {level!r}")
        debug = env.get("FLASK_DEBUG", env.get("DEBUG", "0")).lower() in _TRUTHY
        return cls(
            chain_size=_env_int(env, "COLORWARS_CHAIN_SIZE", 9, CHAIN_MIN_SIZE),
            flood_size=_env_int(env, "COLORWARS_FLOOD_SIZE", 10, FLOOD_MIN_SIZE),
            palette=_env_int(env, "COLORWARS_PALETTE", 6, MIN_PALETTE),
            bot_delay_ms=_env_int(env, "COLORWARS_BOT_DELAY_MS", 450, 0),
            max_explosions=_env_int(env, "COLORWARS_MAX_EXPLOSIONS", None, 1),
            log_level=level,
            debug=debug,
            port=_env_int(env, "PORT", 5000, 1),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
