"""Shared pytest fixtures for dinano tests."""

from __future__ import annotations

import pytest

from dinano import Registry


@pytest.fixture()
def registry() -> Registry:
    """Default registry with freezing enabled."""
    return Registry()


@pytest.fixture()
def unfrozen_registry() -> Registry:
    """Registry handing out built values without read-only views."""
    return Registry(freeze_values=False)
