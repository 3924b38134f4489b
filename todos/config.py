"""Settings loaded from environment variables.

CLI flags (`--file`, `--db`, `--verbose`) override whatever is set here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TODOS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    todos_file: Path = Path("todos.json")
    db_path: Optional[Path] = None
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            todos_file=_env_path(_k("FILE"), Path("todos.json")),
            db_path=_env_path(_k("DB"), None),
            log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
        )
