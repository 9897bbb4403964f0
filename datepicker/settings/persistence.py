"""
Loading picker configuration from YAML or JSON files.

Only the configuration is read from disk; the picker never writes files and
does not persist the user's selection.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from ..exceptions import ConfigFileError
from .models import PickerConfig

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def read_config_data(path: Union[str, Path]) -> dict[str, Any]:
    """Read the raw option mapping from a configuration file.

    The format is chosen from the file suffix: ``.yaml``/``.yml`` are parsed
    with ``yaml.safe_load``, ``.json`` with ``json.load``. An empty file yields
    an empty mapping.

    Args:
        path: Path to the configuration file

    Returns:
        Option mapping, possibly empty

    Raises:
        ConfigFileError: If the file is missing, unreadable, malformed, of an
            unknown type, or does not contain a mapping at the top level
    """
    config_file = Path(path)
    suffix = config_file.suffix.lower()
    if suffix not in YAML_SUFFIXES | JSON_SUFFIXES:
        raise ConfigFileError(
            f"Unsupported configuration file type: {suffix or '(none)'}",
            file_path=str(config_file),
        )

    try:
        with config_file.open(encoding="utf-8") as f:
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                text = f.read()
                data = json.loads(text) if text.strip() else None
    except OSError as e:
        raise ConfigFileError(
            f"Failed to read configuration file: {config_file}",
            file_path=str(config_file),
            original_error=e,
        ) from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigFileError(
            f"Malformed configuration file: {config_file}",
            file_path=str(config_file),
            original_error=e,
        ) from e

    if data is None:
        logger.debug(f"Configuration file {config_file} is empty, using defaults")
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            "Configuration file must contain a mapping at the top level",
            file_path=str(config_file),
            details={"found_type": type(data).__name__},
        )
    return data


def load_config(path: Union[str, Path], **overrides: Any) -> PickerConfig:
    """Load a ``PickerConfig`` from a YAML or JSON file.

    Args:
        path: Path to the configuration file
        **overrides: Options that take precedence over the file's values

    Returns:
        Validated picker configuration

    Raises:
        ConfigFileError: If the file cannot be read or parsed
        ConfigError: If the options it contains are invalid

    Example:
        >>> config = load_config("config/picker.yaml", selection_type="days")
    """
    data = read_config_data(path)
    config = PickerConfig.from_mapping(data, **overrides)
    logger.debug(f"Loaded picker configuration from {path}")
    return config
