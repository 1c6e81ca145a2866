"""Shared pytest fixtures for the Stakenet test-suite."""
from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import config
import node_logging


@pytest.fixture(scope="session", autouse=True)
def test_environment() -> Iterator[None]:
    """Ensure tests run with the dedicated 'test' configuration and logging."""
    original_env = os.environ.get("STAKENET_ENV")
    os.environ["STAKENET_ENV"] = "test"

    config.reload_settings(env="test")
    node_logging.configure(config.settings.logging)

    yield

    if original_env is None:
        os.environ.pop("STAKENET_ENV", None)
        config.reload_settings(env="development")
    else:
        os.environ["STAKENET_ENV"] = original_env
        config.reload_settings(env=original_env)


@pytest.fixture()
def fresh_settings() -> Iterator[None]:
    """Restore the test settings after a test that reloads them."""
    yield
    config.reload_settings(env="test")
