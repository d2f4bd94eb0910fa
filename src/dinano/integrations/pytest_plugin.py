from __future__ import annotations

import pytest

from dinano._internal.registry import Registry


@pytest.fixture()
def dinano_registry() -> Registry:
    """Create a per-test registry.

    The fixture is function-scoped, so registrations are isolated between tests
    unless users override fixture scope explicitly. Register test doubles with
    ``register_mock`` to keep them mutable after ``invoke``.

    Returns:
        A new ``Registry`` instance.

    """
    return Registry()


__all__ = ["dinano_registry"]
