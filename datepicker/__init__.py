"""Date picker core - calendar state machine and date-constraint evaluator.

The package decides which view is shown, which cells are selectable, how
navigation between year blocks, months and days works, and whether a date
passes the configured constraints. Rendering is left to the host, which feeds
gestures to a ``PickerController`` and draws its ``PickerSnapshot``.
"""

from .constraints import DateConstraints, is_allowed, matching_rules
from .exceptions import ConfigError, ConfigFileError, PickerError
from .settings import PickerConfig, load_config
from .ui import Cell, PickerController, PickerSnapshot, ViewState
from .view_types import Granularity, Weekday

__version__ = "1.0.0"
__description__ = "Calendar state machine and date-constraint evaluator for date pickers"

__all__ = [
    "Cell",
    "ConfigError",
    "ConfigFileError",
    "DateConstraints",
    "Granularity",
    "PickerConfig",
    "PickerController",
    "PickerError",
    "PickerSnapshot",
    "ViewState",
    "Weekday",
    "__description__",
    "__version__",
    "is_allowed",
    "load_config",
    "matching_rules",
]
