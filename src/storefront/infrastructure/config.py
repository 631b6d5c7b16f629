"""Runtime settings read from the environment.

A ``.env`` file in the working directory is loaded first (without
overriding variables already set), then:

- ``STOREFRONT_DATA_DIR``   directory holding the JSON data files
- ``STOREFRONT_CACHE_TTL``  read-cache lifetime in seconds, 0 disables it
- ``STOREFRONT_LOG_LEVEL``  root log level name
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_CACHE_TTL = 300
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))

    raw_ttl = os.environ.get("STOREFRONT_CACHE_TTL", str(DEFAULT_CACHE_TTL))
    try:
        ttl = int(raw_ttl)
    except ValueError as exc:
        raise ValueError(f"STOREFRONT_CACHE_TTL must be an integer, got {raw_ttl!r}") from exc
    if ttl < 0:
        raise ValueError("STOREFRONT_CACHE_TTL cannot be negative")

    data_dir = os.environ.get("STOREFRONT_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        cache_ttl_seconds=ttl,
        log_level=os.environ.get("STOREFRONT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
