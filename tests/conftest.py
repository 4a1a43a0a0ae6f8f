"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def medium(tmp_path):
    from tests.helpers import FakeMedium
    return FakeMedium(tmp_path / 'savedata')


@pytest.fixture
def session_provider():
    from tests.helpers import FakeSessionProvider
    return FakeSessionProvider(uid=(11, 22))
