"""Shared fixtures for the rpneval test suite."""

from __future__ import annotations

import pytest

from rpneval.config import reset_config


@pytest.fixture(autouse=True)
def _reset_engine_config():
    """Every test starts and ends with default settings and no log sink."""
    reset_config()
    yield
    reset_config()
