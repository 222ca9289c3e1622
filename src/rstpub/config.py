"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "RSTPUB_"


class Settings(BaseModel):
    app_name:       str = "rstpub"
    content_dir:    str = Field(default="_content",    description="Root holding articles/, snippets/, projects/, books/")
    output_dir:     str = Field(default="_build/data", description="Directory for the JSON artifacts")
    chunk_size:     int = Field(default=1000, ge=1, description="Items per content-chunks file")
    recent_limit:   int = Field(default=5,    ge=0, description="Documents per category in recent.json")
    fuzzy_snippets: bool = Field(default=True, description="Allow substring matching of snippet references")
    log_level:      str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then RSTPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
