from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from dinano._internal.cycles import detect_cycle
from dinano._internal.freezing import is_frozen
from dinano._internal.orchestrator import build_node
from dinano._internal.signature import DependenciesDeclaration, declared_inputs_of
from dinano._internal.state import UNBUILT, BuildState, NodeState, Ready
from dinano._internal.type_checks import is_factory
from dinano.exceptions import (
    DINanoIncompleteDependencyError,
    DINanoInvalidTypeError,
    DINanoNotCallableError,
)

logger = logging.getLogger(__name__)


class _ValueFactory:
    """Zero-argument factory returning an already-built value."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __call__(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"_ValueFactory({self.value!r})"


class DependencyNode:
    """Wrap one named factory with its declared inputs and build state.

    Declared inputs are computed once, at construction. The node moves from
    ``UNBUILT`` through ``BUILDING`` to ``READY`` exactly once, and its value is
    only reachable in the ``READY`` phase.
    """

    def __init__(
        self,
        name: str,
        source: Any,
        *,
        is_mock: bool = False,
        freeze_value: bool = True,
        dependencies: DependenciesDeclaration | None = None,
    ) -> None:
        """Wrap ``source`` as the node called ``name``.

        Args:
            name: Unique node name within its registry.
            source: A factory (function, method, class or partial) or a plain value.
            is_mock: Mark the node as a test double; its value is never frozen.
            freeze_value: Freeze the built value. Ignored for mocks.
            dependencies: Explicit input names overriding the factory signature.

        Raises:
            DINanoInvalidTypeError: If ``dependencies`` is given for a plain value.
            DINanoParseError: If input names cannot be derived from the signature.

        """
        self.name = name
        self.is_mock = is_mock
        self.freezes = freeze_value and not is_mock
        self.state: BuildState = UNBUILT

        if is_factory(source):
            self.factory: Callable[..., Any] = source
            self._declared_inputs = declared_inputs_of(source, dependencies)
        elif dependencies is not None:
            raise DINanoInvalidTypeError(name, type(source).__name__)
        else:
            self.factory = _ValueFactory(source)
            self._declared_inputs = ()

    @property
    def phase(self) -> NodeState:
        return self.state.phase

    def get_declared_inputs(self) -> list[str]:
        """Return a copy of the declared input names in positional order."""
        return list(self._declared_inputs)

    def is_ready(self) -> bool:
        """Return whether the value is built and can be handed out."""
        return isinstance(self.state, Ready)

    def get_value(self) -> Any:
        """Return the built value.

        Raises:
            DINanoIncompleteDependencyError: If the node is not ready yet.

        """
        return self._ready_value("get")

    def call(self, *args: Any, **kwargs: Any) -> Any:
        """Call the built value with the given arguments.

        Raises:
            DINanoIncompleteDependencyError: If the node is not ready yet.
            DINanoNotCallableError: If the built value is not callable.

        """
        value = self._ready_value("call")
        target = value.__wrapped__ if is_frozen(value) else value
        if not callable(target):
            raise DINanoNotCallableError(self.name)
        return value(*args, **kwargs)

    def detect_cycle(self, nodes: Mapping[str, DependencyNode]) -> None:
        """Raise if the inputs reachable from this node form a cycle or name unknown nodes."""
        detect_cycle(self.name, nodes)

    async def build(self, nodes: Mapping[str, DependencyNode]) -> Any:
        """Build this node and its transitive inputs; see ``build_node``."""
        return await build_node(self, nodes)

    def transition(self, state: BuildState) -> None:
        """Move the node to ``state``. Called by the build orchestrator."""
        logger.debug("Dependency %r: %s -> %s", self.name, self.phase.value, state.phase.value)
        self.state = state

    def _ready_value(self, operation: str) -> Any:
        state = self.state
        if not isinstance(state, Ready):
            raise DINanoIncompleteDependencyError(self.name, operation)
        return state.value

    def __repr__(self) -> str:
        return (
            f"DependencyNode(name={self.name!r}, inputs={list(self._declared_inputs)!r}, "
            f"phase={self.phase.value!r}, is_mock={self.is_mock!r})"
        )


__all__ = ["DependencyNode"]
