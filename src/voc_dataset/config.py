"""Loader configuration loading and management."""

import warnings
from dataclasses import fields, replace
from pathlib import Path

import yaml

from .types import LoaderConfig


# Default config template with comments
DEFAULT_CONFIG_TEMPLATE = '''# voc-dataset configuration
# CLI flags override these values

image_dir: JPEGImages
annotation_dir: Annotations
image_ext: jpg  # images are matched by this extension (case-sensitive)
annotation_ext: xml
sort_samples: true  # false keeps directory listing order
encoding: utf-8
'''


def generate_default_config(config_path: Path) -> None:
    """Generate a default config file at the given path.

    Args:
        config_path: Path where to create the config file.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG_TEMPLATE)


def load_config(config_path: Path | str) -> LoaderConfig:
    """Load and validate YAML configuration.

    If the config file doesn't exist, it will be generated with defaults.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        LoaderConfig with all settings.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        warnings.warn(
            f"Config file not found: {config_path}. "
            f"Generating default config.",
            UserWarning
        )
        generate_default_config(config_path)

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(
            f"Invalid YAML in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Suggestion: Fix the YAML syntax or delete the file to regenerate defaults."
        ) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    # Warn about unknown keys (forward compatibility)
    known_keys = {f.name for f in fields(LoaderConfig)}
    unknown_keys = set(data.keys()) - known_keys
    if unknown_keys:
        warnings.warn(
            f"Unknown config keys will be ignored: {unknown_keys}. "
            f"Check spelling or update your config file.",
            UserWarning
        )
        data = {k: v for k, v in data.items() if k in known_keys}

    return LoaderConfig.from_dict(data)


def merge_cli_overrides(config: LoaderConfig, **overrides) -> LoaderConfig:
    """Apply CLI overrides to config values.

    CLI flags have priority over config file values. ``None`` means the
    flag was not given.

    Args:
        config: Base configuration from YAML.
        **overrides: Any LoaderConfig field as key=value.

    Returns:
        New LoaderConfig with overrides applied.
    """
    known_keys = {f.name for f in fields(LoaderConfig)}
    applied = {k: v for k, v in overrides.items() if k in known_keys and v is not None}
    return replace(config, **applied)
