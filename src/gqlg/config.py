from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from gqlg import log

DEFAULT_DEPTH_LIMIT = 100
DEFAULT_FILE_EXTENSION = "gql"


class GeneratorConfig(BaseModel):
    """Options controlling how operation documents are synthesized and persisted."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    depth_limit: PositiveInt = Field(DEFAULT_DEPTH_LIMIT, alias="depthLimit")
    include_deprecated_fields: bool = Field(False, alias="includeDeprecatedFields")
    include_cross_references: bool = Field(False, alias="includeCrossReferences")
    assume_valid: bool = Field(False, alias="assumeValid")
    file_extension: str = Field(DEFAULT_FILE_EXTENSION, alias="ext")

    @field_validator("file_extension")
    @classmethod
    def normalize_file_extension(cls, value: str) -> str:
        extension = value.strip().lstrip(".")
        if not extension:
            raise ValueError("File extension cannot be empty")
        return extension

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Return a copy where every override that is not None replaces the current value.

        Args:
            **overrides: Field names (snake_case) mapped to new values; None means "keep"

        Returns:
            A validated GeneratorConfig
        """
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return GeneratorConfig.model_validate(values)


def load_generator_config(config_path: Path | None) -> GeneratorConfig:
    """
    Load and validate a generator configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None to use the defaults.

    Returns:
        A validated GeneratorConfig.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against GeneratorConfig fails.
    """
    if config_path is None:
        log.debug("No generator config provided, using defaults")
        return GeneratorConfig()

    raw: Any
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    log.debug("Loaded generator config from %s", config_path)

    # Empty file or explicit YAML null means defaults
    if raw is None or raw == {}:
        return GeneratorConfig()

    if not isinstance(raw, dict):
        raise TypeError(f"Generator config root must be a mapping (YAML object), got {type(raw).__name__}")

    return GeneratorConfig.model_validate(cast(dict[str, Any], raw))
