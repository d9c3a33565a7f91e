"""Pytest configuration and fixtures for querycodec tests."""

import pytest
from dotenv import load_dotenv

from querycodec.callables import CallableRegistry
from querycodec.codec import ValueCodec, default_codec

# Load environment variables
load_dotenv()


@pytest.fixture(autouse=True)
def fresh_default_codec():
    """Rebuild the settings-driven default codec around every test."""
    default_codec.cache_clear()
    yield
    default_codec.cache_clear()


@pytest.fixture
def codec():
    """Codec with the wire-compatible defaults."""
    return ValueCodec()


@pytest.fixture
def nested_codec():
    """Codec that escapes nested parts so any nesting round-trips."""
    return ValueCodec(nested_escaping=True)


@pytest.fixture
def registry():
    """Registry holding a couple of named sort keys."""
    reg = CallableRegistry()

    @reg.register
    def by_name(item):
        return item["name"]

    reg.register(len, name="length")
    return reg


@pytest.fixture
def sample_filter():
    """Filter/sort/page description as built by list views."""
    return {
        "status": "active",
        "page": 2,
        "archived": True,
        "owner": None,
    }
