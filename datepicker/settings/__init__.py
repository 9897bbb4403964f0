"""
Picker configuration: the validated option model and its file loader.

Public API:
    PickerConfig: Complete, immutable picker configuration
    normalize_to_period: Canonical first day of a year/month/day period
    load_config: Build a PickerConfig from a YAML or JSON file
    read_config_data: Read the raw option mapping from a file
"""

from .models import PickerConfig, normalize_to_period
from .persistence import load_config, read_config_data

__all__ = [
    "PickerConfig",
    "load_config",
    "normalize_to_period",
    "read_config_data",
]
