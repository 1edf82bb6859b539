from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_DB_PATH = "fitness.db"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    db_path: str = DEFAULT_DB_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    return Settings(
        db_path=os.environ.get("FITNESS_DB_PATH", DEFAULT_DB_PATH),
        log_level=os.environ.get("FITNESS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)
