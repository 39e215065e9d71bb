"""Runtime settings read from the environment (and an optional ``.env``)."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    store_dir: Path
    export_dir: Path
    strict_store: bool
    log_level: str


def load_settings() -> Settings:
    """Load the nearest ``.env`` (searching up from the cwd), then build Settings from it.

    Variables already set in the environment win over ``.env`` values.
    """
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings(
        store_dir=Path(os.getenv("UNITALKS_STORE_DIR", ".unitalks")),
        export_dir=Path(os.getenv("UNITALKS_EXPORT_DIR", ".")),
        strict_store=os.getenv("UNITALKS_STRICT_STORE", "false").strip().lower() in _TRUTHY,
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    )
    logger.debug("Loaded settings: %s", settings)
    return settings
