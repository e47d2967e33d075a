"""Root conftest — shared test configuration.

Invariants:
    - Settings never point at a real data file or client build during tests
    - get_settings cache is cleared around every test so env overrides apply
"""

import os

import pytest

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("STATIC_DIR", "__no_static_dir__")
os.environ.setdefault("LOG_FORMAT", "text")

from starfield.config import get_settings  # noqa: E402
from star_factories import FakeClock  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
