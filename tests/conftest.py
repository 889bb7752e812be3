# File: tests/conftest.py
import sys
from datetime import datetime

import pytest

from font_scout.catalog import Catalog
from font_scout.config import ScannerConfig
from font_scout.logger import configure


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the project logger on the current stderr and out of test output."""
    configure(level="WARNING", stream=sys.stderr)
    yield


@pytest.fixture()
def basic_config() -> ScannerConfig:
    """
    Return a ScannerConfig with short timeouts for scanner tests.
    """
    return ScannerConfig(
        navigation_timeout=1.0,
        scan_timeout=0.5,
        max_elements=200,
    )


@pytest.fixture()
def catalog() -> Catalog:
    return Catalog.from_names(["Recoleta", "Forma"])


@pytest.fixture()
def fixed_clock():
    """Clock returning a constant timestamp."""
    moment = datetime(2024, 5, 17, 14, 30, 5)
    return lambda: moment
