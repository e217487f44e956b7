from pathlib import Path

import pytest
from pydantic import ValidationError

from gqlg.config import GeneratorConfig, load_generator_config


def test_defaults() -> None:
    config = GeneratorConfig()

    assert config.depth_limit == 100
    assert not config.include_deprecated_fields
    assert not config.include_cross_references
    assert not config.assume_valid
    assert config.file_extension == "gql"


def test_aliases_and_extension_normalization() -> None:
    config = GeneratorConfig.model_validate({"depthLimit": 3, "includeCrossReferences": True, "ext": ".graphql"})

    assert config.depth_limit == 3
    assert config.include_cross_references
    assert config.file_extension == "graphql"


@pytest.mark.parametrize("values", [{"depth_limit": 0}, {"ext": "."}, {"unknown": True}])
def test_invalid_values_are_rejected(values: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        GeneratorConfig.model_validate(values)


def test_overrides_ignore_none() -> None:
    config = GeneratorConfig(depth_limit=5).with_overrides(depth_limit=None, include_deprecated_fields=True)

    assert config.depth_limit == 5
    assert config.include_deprecated_fields


def test_load_without_path_gives_defaults() -> None:
    assert load_generator_config(None) == GeneratorConfig()


def test_load_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "gqlg.yaml"
    config_path.write_text("depthLimit: 4\nincludeDeprecatedFields: true\next: graphql\n")

    config = load_generator_config(config_path)

    assert config == GeneratorConfig(depth_limit=4, include_deprecated_fields=True, file_extension="graphql")


def test_load_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")

    assert load_generator_config(config_path) == GeneratorConfig()


def test_load_non_mapping_yaml_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "list.yaml"
    config_path.write_text("- depthLimit\n")

    with pytest.raises(TypeError, match="must be a mapping"):
        load_generator_config(config_path)
