"""Engine configuration and its YAML loader."""

import asyncio
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError
from typing_extensions import TypeAliasType

from vv_results.models.base import Model
from vv_results.models.verdict import Mode

StderrPolicy = TypeAliasType("StderrPolicy", Literal["ignore", "fail"])
Selection = TypeAliasType("Selection", Literal["all", "representative"])


class EngineConfig(Model):
    """Options that change how tests are classified and counted."""

    stderr_policy: StderrPolicy = Field(
        default="ignore",
        description="Whether non-empty stderr fails a phase that reported a pass",
    )
    selection: Selection = Field(
        default="all",
        description="Report every test, or one representative per base name",
    )
    mode: Mode = Field(
        default="full", description="Counting mode used for summaries"
    )

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with the given non-None values replaced."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **values})


def _load_config_sync(config_path: Path) -> EngineConfig:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return EngineConfig()

    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config schema in {config_path}: {e}") from e


async def load_config(config_path: Path) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Parsed configuration; an empty file yields the defaults

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is malformed or does not match the schema

    """
    return await asyncio.to_thread(_load_config_sync, config_path)
