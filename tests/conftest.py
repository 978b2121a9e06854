"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add src to path so we can import slovlex
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from slovlex.config import Settings  # noqa: E402


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment, writing under tmp_path."""
    return Settings(
        source_dir=str(tmp_path / "source"),
        seed_dir=str(tmp_path / "seed"),
        request_min_interval_seconds=0.0,
        request_backoff_base_seconds=2.0,
        _env_file=None,
    )
