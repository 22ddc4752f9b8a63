"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

from type_mox.descriptors import describe

pytest_plugins = ("type_mox.pytest_plugin", "pytester")


@pytest.fixture(autouse=True)
def reset_descriptor_cache() -> t.Generator[None, None, None]:
    """Ensure class descriptors are rebuilt between tests."""
    describe.cache_clear()
    yield
    describe.cache_clear()
