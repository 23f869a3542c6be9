"""Runtime configuration.

Values come from the environment, optionally seeded from a ``.env`` file
in the working directory. Settings are read on each call so tests and
the CLI can point the store at a different directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: int


def load_settings() -> Settings:
    data_dir = os.getenv("STOREFRONT_DATA_DIR")
    level_name = os.getenv("STOREFRONT_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        log_level=level,
    )
