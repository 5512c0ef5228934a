"""Configuration loading utilities for IRL onboarding."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .paths import default_store_dir, runtime_config_dir


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class StorageConfig(BaseModel):
    store_dir: Path = Field(
        default_factory=default_store_dir,
        description="Directory holding profile.json and the private key",
    )

    @field_validator("store_dir")
    @classmethod
    def _expand_store_dir(cls, value: Path) -> Path:
        return Path(value).expanduser()


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".irl" / "config.yaml"
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return AppConfig()


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(AppConfig().model_dump(mode="json"), handle, sort_keys=False)


__all__ = ["AppConfig", "LoggingConfig", "StorageConfig", "load_config", "dump_default_config"]
