"""Pytest configuration shared across the suite."""

import pytest

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from app.core.config import get_settings


@pytest.fixture
def anyio_backend() -> str:
    """Route tests only run on asyncio."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Let tests that touch the environment see their own settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
