"""Configuration settings and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pairwiseqa.errors import ConfigLoadError, ErrorContext


class PairwiseConfig(BaseSettings):
    """Configuration for pairwiseqa."""

    model_config = SettingsConfigDict(
        env_prefix="PAIRWISEQA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_results: int = Field(default=50, ge=1)
    max_assignments: int | None = None
    output_dir: str = "."
    csv_filename: str = "pairwise-test-combinations.csv"
    json_indent: int = 2
    verbose: bool = False

    @field_validator("max_assignments", mode="before")
    @classmethod
    def validate_max_assignments(cls, v: Any) -> Any:
        if v in ("", None):
            return None
        return v

    @field_validator("csv_filename")
    @classmethod
    def validate_csv_filename(cls, v: str) -> str:
        if not v.endswith(".csv"):
            raise ValueError("csv_filename must end with .csv")
        return v


def load_config(config_path: str | Path | None = None) -> PairwiseConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults

    Raises:
        ConfigLoadError: If an explicit file is missing, unreadable, or
            contains invalid values.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        context = ErrorContext(path=str(config_path))
        if not config_path.exists():
            raise ConfigLoadError(f"Config file not found: {config_path}", context=context)
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Invalid YAML in {config_path}", context=context, cause=e) from e
        if not isinstance(config_data, dict):
            raise ConfigLoadError(
                "Config file must contain a mapping",
                context=context,
                expected="mapping",
                value=config_data,
            )

    config_data.update(_get_env_overrides())

    try:
        return PairwiseConfig(**config_data)
    except ValidationError as e:
        raise ConfigLoadError(
            f"Invalid configuration: {e.error_count()} error(s)",
            context=ErrorContext(path=str(config_path) if config_path else None),
            cause=e,
        ) from e


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables.

    Raw strings are passed through; PairwiseConfig validates and coerces them.
    """
    env_mappings = {
        "PAIRWISEQA_MAX_RESULTS": "max_results",
        "PAIRWISEQA_MAX_ASSIGNMENTS": "max_assignments",
        "PAIRWISEQA_OUTPUT_DIR": "output_dir",
        "PAIRWISEQA_VERBOSE": "verbose",
    }

    overrides: dict[str, Any] = {}
    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            overrides[config_key] = value

    return overrides
