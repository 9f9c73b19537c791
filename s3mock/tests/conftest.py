"""Pytest configuration for mock S3 tests."""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset settings and side tables between tests."""
    from s3mock import settings, side_tables

    settings.reset_settings()
    side_tables.reset_side_tables()

    yield

    settings.reset_settings()
    side_tables.reset_side_tables()


@pytest.fixture
def temp_s3_dir():
    """Create a temporary directory used as the mock's base path."""
    from s3mock import settings

    with tempfile.TemporaryDirectory() as tmpdir:
        settings.configure(base_path=tmpdir)
        yield Path(tmpdir)


@pytest.fixture
def s3(temp_s3_dir):
    """A mock client rooted at the temporary base path."""
    from s3mock.client import S3

    return S3()


@pytest.fixture
def bucket(temp_s3_dir):
    """Create the "demo" bucket directory and return its path."""
    path = temp_s3_dir / "demo"
    path.mkdir()
    return path


@pytest.fixture
def make_objects(bucket):
    """Write files into the "demo" bucket; each file holds its own key."""

    def _make(*keys: str) -> None:
        for key in keys:
            path = bucket / key
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(key.encode("utf-8"))

    return _make
