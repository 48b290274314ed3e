"""Engine settings read from ``ABBREV_ENGINE_*`` environment variables."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from abbrev_engine.abbreviations import AbbreviationTable
from abbrev_engine.runtime.telemetry import env

DEFAULT_ABBREVIATIONS_PATH = Path("~/.config/abbrev_engine/abbreviations")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    abbreviations_path: Path = DEFAULT_ABBREVIATIONS_PATH
    encoding: str = "utf-8"


def load_config() -> EngineConfig:
    path = env("ABBREVIATIONS_FILE")
    encoding = env("ABBREVIATIONS_ENCODING") or "utf-8"
    return EngineConfig(
        abbreviations_path=Path(path) if path else DEFAULT_ABBREVIATIONS_PATH,
        encoding=encoding,
    )


def load_abbreviations(config: Optional[EngineConfig] = None) -> AbbreviationTable:
    """Load the configured abbreviation file; an unreadable file gives no entries."""

    config = config or load_config()
    return AbbreviationTable.load_from_path(
        config.abbreviations_path.expanduser(), encoding=config.encoding
    )


__all__ = [
    "DEFAULT_ABBREVIATIONS_PATH",
    "EngineConfig",
    "load_abbreviations",
    "load_config",
]
