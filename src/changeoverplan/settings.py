from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_LINE_NUMBER = "S-10"
DEFAULT_MATCH_THRESHOLD = 0.45


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str = "INFO"
    line_number: str = DEFAULT_LINE_NUMBER
    match_threshold: float = DEFAULT_MATCH_THRESHOLD


def default_db_path() -> Path:
    # Fixed, repo-local database location (keeps paths stable across machines).
    return Path("db") / "changeover.db"
