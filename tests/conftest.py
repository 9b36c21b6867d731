"""Pytest configuration and fixtures."""

import os

import pytest

from tests.fixtures_scoring import make_reading_score


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SHADE_ENGINE_ENV"] = "test"


@pytest.fixture
def passing_score() -> dict:
    """A reading score that clears every rubric check."""
    return make_reading_score(core=85)
