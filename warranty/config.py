"""Service configuration read from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

# Default data directory (relative to project root)
DEFAULT_VEHICLES_DIR = Path(__file__).parent.parent / "vehicles"


@dataclass(frozen=True)
class Config:
    app_env: str = "development"
    log_level: str = "info"
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    vehicles_dir: Path = DEFAULT_VEHICLES_DIR


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from the environment, falling back to defaults."""
    env = os.environ if environ is None else environ

    raw_port = env.get("HTTP_PORT") or "8080"
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"HTTP_PORT has invalid value {raw_port!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"HTTP_PORT must be between 1 and 65535, got {port}")

    return Config(
        app_env=env.get("APP_ENV") or "development",
        log_level=env.get("LOG_LEVEL") or "info",
        http_host=env.get("HTTP_HOST") or "0.0.0.0",
        http_port=port,
        vehicles_dir=Path(env.get("VEHICLES_DIR") or DEFAULT_VEHICLES_DIR),
    )
