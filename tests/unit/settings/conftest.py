"""Shared test fixtures for settings tests."""

from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create a temporary configuration directory for testing."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_options() -> dict[str, Any]:
    """Flat camelCase options as a host page would pass them."""
    return {
        "selectionType": "days",
        "startingDate": "2021-03-10",
        "minDate": "2020-12-01",
        "maxDate": "2022-12-14",
        "disabledWeekdays": ["sat", "sun"],
        "disabledYears": [2021],
    }
