"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from currentaffairs.core.config import ClassifierRules, PromptConfig, SourceConfig
from currentaffairs.utils.exceptions import ConfigurationError

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "data"


class ConfigLoader:
    """Configuration loader for the YAML files under one directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize config loader.

        Args:
            config_dir: Configuration directory path; defaults to the
                files shipped with the package
        """
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR

    def load_sources_config(self) -> List[SourceConfig]:
        return load_sources_config(self.config_dir)

    def load_classifier_rules(self) -> ClassifierRules:
        return load_classifier_rules(self.config_dir)

    def load_prompt_config(self, prompt_name: str) -> PromptConfig:
        return load_prompt_config(prompt_name, self.config_dir)


def load_yaml(file_path: Path) -> Dict[str, Any]:
    """Load YAML file.

    Args:
        file_path: Path to YAML file

    Returns:
        Parsed YAML data

    Raises:
        ConfigurationError: If file doesn't exist or is invalid
    """
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at top level of {file_path}")
    return data


def load_sources_config(config_dir: Path = DEFAULT_CONFIG_DIR) -> List[SourceConfig]:
    """Load the source registry from ``sources.yaml``.

    Inactive sources are returned too; the pipeline skips them.

    Raises:
        ConfigurationError: On invalid entries or duplicate source ids
    """
    data = load_yaml(config_dir / "sources.yaml")

    sources = []
    seen_ids = set()
    for source_data in data.get("sources", []):
        try:
            source = SourceConfig(**source_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid source configuration: {source_data.get('id', 'unknown')}: {e}"
            ) from e

        if source.id in seen_ids:
            raise ConfigurationError(f"Duplicate source id: {source.id}")
        seen_ids.add(source.id)
        sources.append(source)

    return sources


def load_classifier_rules(config_dir: Path = DEFAULT_CONFIG_DIR) -> ClassifierRules:
    """Load keyword sets and thresholds from ``classifier_rules.yaml``."""
    data = load_yaml(config_dir / "classifier_rules.yaml")

    try:
        return ClassifierRules(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid classifier rules: {e}") from e


def load_prompt_config(
    prompt_name: str, config_dir: Path = DEFAULT_CONFIG_DIR
) -> PromptConfig:
    """Load prompt configuration from ``prompts/<name>.yaml``."""
    data = load_yaml(config_dir / "prompts" / f"{prompt_name}.yaml")

    try:
        return PromptConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid prompt configuration: {prompt_name}: {e}"
        ) from e
