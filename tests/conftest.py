"""
Shared fixtures for netrckit tests.
"""

from pathlib import Path

import pytest


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def good_bytes():
    """Raw bytes of the well-formed sample netrc file."""
    return (FIXTURES / "good.netrc").read_bytes()


@pytest.fixture
def good_path(tmp_path, good_bytes):
    """Writable copy of the well-formed sample netrc file."""
    path = tmp_path / "netrc"
    path.write_bytes(good_bytes)
    return path


@pytest.fixture
def bad_order_path():
    """Sample file with a machine entry after the default entry."""
    return FIXTURES / "bad_default_order.netrc"
