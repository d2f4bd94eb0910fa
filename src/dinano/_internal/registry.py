from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType, ModuleType
from typing import Any, TypeVar

from typing_extensions import Self

from dinano._internal.cycles import CycleDetector
from dinano._internal.node import DependencyNode
from dinano._internal.signature import DependenciesDeclaration
from dinano._internal.state import Building
from dinano._internal.type_checks import is_factory, unsupported_type_name
from dinano.exceptions import (
    DINanoAlreadyExistsError,
    DINanoInvalidNameError,
    DINanoInvalidTypeError,
    DINanoRegistryClosedError,
    DINanoUnknownDependencyError,
    DINanoUnsupportedTypeError,
)

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

_INFERRED_NAME_PREFIXES = ("make_", "provide_")


class Registry:
    """Own a graph of named dependency nodes and resolve it once.

    Register factories and values by name, then ``await registry.invoke()``
    to receive every built value keyed by name. Each factory receives the
    values named by its parameters, positionally and fully built, whether
    those values came from sync or async factories.

    A registry is single-use. Registrations must complete before ``invoke``
    and the mapping it returns is the terminal artifact.

    Examples:
        .. code-block:: python

            registry = Registry()
            registry.register_one({"port": 8080}, "conf")
            registry.register_all({"server": lambda conf: Server(conf["port"])})
            modules = await registry.invoke()

    """

    def __init__(self, *, freeze_values: bool = True) -> None:
        """Create an empty registry.

        Args:
            freeze_values: Hand out built values through read-only views.
                Mock registrations are never frozen.

        """
        self._nodes: dict[str, DependencyNode] = {}
        self._freeze_values = freeze_values
        self._closed = False

    @classmethod
    def from_mapping(
        cls,
        named_factories: Mapping[str, Callable[..., Any]] | ModuleType,
        *,
        freeze_values: bool = True,
    ) -> Self:
        """Create a registry holding the given factories; see ``register_all``."""
        registry = cls(freeze_values=freeze_values)
        registry.register_all(named_factories)
        return registry

    def register_one(
        self,
        value: Any,
        name: str,
        *,
        dependencies: DependenciesDeclaration | None = None,
    ) -> None:
        """Register a plain value or a factory under an explicit name.

        Args:
            value: Already-built object, or a factory producing one.
            name: Unique, non-empty dependency name.
            dependencies: Explicit input names for a factory, overriding its signature.

        Raises:
            DINanoInvalidNameError: If ``name`` is not a non-empty string.
            DINanoUnsupportedTypeError: If ``value`` is ``None`` or a primitive.
            DINanoAlreadyExistsError: If ``name`` is already registered.

        """
        self._register(name, value, is_mock=False, dependencies=dependencies)

    def register_mock(
        self,
        name: str,
        value: Any,
        *,
        dependencies: DependenciesDeclaration | None = None,
    ) -> None:
        """Register a test double whose built value stays mutable.

        Accepts the same values and raises the same errors as ``register_one``.
        """
        self._register(name, value, is_mock=True, dependencies=dependencies)

    def register_all(
        self,
        named_factories: Mapping[str, Callable[..., Any]] | ModuleType,
        *,
        dependencies: Mapping[str, DependenciesDeclaration] | None = None,
    ) -> None:
        """Register several factories, each under its own name.

        A module registers the names listed in its ``__all__``, or else every
        public function and class defined in it. Either all entries are
        registered or, when one is invalid, none is.

        Args:
            named_factories: Mapping of name to factory, or a module of factories.
            dependencies: Optional explicit input names keyed by factory name.

        Raises:
            DINanoInvalidTypeError: If an entry is not a factory.
            DINanoInvalidNameError: If a key is not a non-empty string.
            DINanoAlreadyExistsError: If a key is already registered.
            DINanoUnknownDependencyError: If ``dependencies`` names no entry.

        """
        self._ensure_open("register_all")
        entries = (
            _module_factories(named_factories)
            if isinstance(named_factories, ModuleType)
            else dict(named_factories)
        )
        declarations = dependencies or {}
        unmatched = sorted(set(declarations) - set(entries))
        if unmatched:
            raise DINanoUnknownDependencyError(unmatched[0])

        staged: dict[str, DependencyNode] = {}
        for name, factory in entries.items():
            _validate_name(name)
            if not is_factory(factory):
                raise DINanoInvalidTypeError(name, type(factory).__name__)
            if name in self._nodes:
                raise DINanoAlreadyExistsError(name)
            staged[name] = self._make_node(
                name,
                factory,
                is_mock=False,
                dependencies=declarations.get(name),
            )
        self._nodes.update(staged)

    def provides(
        self,
        name: str | None = None,
        *,
        dependencies: DependenciesDeclaration | None = None,
    ) -> Callable[[F], F]:
        """Register the decorated factory and return it unchanged.

        Args:
            name: Dependency name. Defaults to the function name with a leading
                ``make_`` or ``provide_`` removed.
            dependencies: Explicit input names overriding the signature.

        Example:
            .. code-block:: python

                @registry.provides()
                def make_helpers(conf):
                    return Helpers(conf)

        """

        def decorator(factory: F) -> F:
            dependency_name = (
                name
                if name is not None
                else _infer_name_from(getattr(factory, "__name__", type(factory).__name__))
            )
            if not is_factory(factory):
                raise DINanoInvalidTypeError(dependency_name, type(factory).__name__)
            self._register(
                dependency_name,
                factory,
                is_mock=False,
                dependencies=dependencies,
            )
            return factory

        return decorator

    async def invoke(self) -> dict[str, Any]:
        """Check the whole graph, build every node and return the built values.

        The cycle check covers every node before any factory runs. Independent
        subtrees build concurrently on the running event loop; every factory
        runs at most once.

        Returns:
            A mapping of name to built value, with keys in ascending order.

        Raises:
            DINanoCircularDependencyError: If declared inputs form a cycle.
            DINanoUnknownDependencyError: If a declared input is not registered.
            DINanoUnsupportedResultError: If a factory produced a primitive value.
            DINanoRegistryClosedError: If ``invoke`` was already called.

        Notes:
            A factory's own exception propagates unchanged. Builds still in
            flight when an error surfaces are cancelled before it is re-raised.

        """
        self._ensure_open("invoke")
        self._closed = True

        nodes = MappingProxyType(self._nodes)
        CycleDetector(nodes).check_all()
        self._log_graph_summary()

        try:
            await asyncio.gather(*(node.build(nodes) for node in nodes.values()))
        except BaseException:
            self._cancel_pending_builds()
            raise

        return {name: nodes[name].get_value() for name in sorted(nodes)}

    def names(self) -> list[str]:
        """Return registered names in ascending order."""
        return sorted(self._nodes)

    def node(self, name: str) -> DependencyNode:
        """Return the node registered under ``name``."""
        return self._nodes[name]

    @property
    def closed(self) -> bool:
        return self._closed

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def _register(
        self,
        name: str,
        value: Any,
        *,
        is_mock: bool,
        dependencies: DependenciesDeclaration | None,
    ) -> None:
        self._ensure_open("register")
        _validate_name(name)
        type_name = unsupported_type_name(value)
        if type_name is not None:
            raise DINanoUnsupportedTypeError(type_name)
        if name in self._nodes:
            raise DINanoAlreadyExistsError(name)
        self._nodes[name] = self._make_node(
            name,
            value,
            is_mock=is_mock,
            dependencies=dependencies,
        )

    def _make_node(
        self,
        name: str,
        source: Any,
        *,
        is_mock: bool,
        dependencies: DependenciesDeclaration | None,
    ) -> DependencyNode:
        return DependencyNode(
            name,
            source,
            is_mock=is_mock,
            freeze_value=self._freeze_values,
            dependencies=dependencies,
        )

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            msg = f"Cannot {operation}: the registry has already been invoked."
            raise DINanoRegistryClosedError(msg)

    def _cancel_pending_builds(self) -> None:
        for node in self._nodes.values():
            state = node.state
            if isinstance(state, Building) and not state.future.done():
                state.future.cancel()

    def _log_graph_summary(self) -> None:
        nodes = self._nodes.values()
        logger.info(
            "Resolving dependency graph: node_count=%d mock_count=%d edge_count=%d",
            len(self._nodes),
            sum(1 for node in nodes if node.is_mock),
            sum(len(node.get_declared_inputs()) for node in nodes),
        )


def _validate_name(name: object) -> None:
    if not isinstance(name, str) or not name:
        msg = f"Invalid dependency name {name!r}. Expected a non-empty string."
        raise DINanoInvalidNameError(msg)


def _infer_name_from(name: str) -> str:
    for prefix in _INFERRED_NAME_PREFIXES:
        if name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix) :]
    return name


def _module_factories(module: ModuleType) -> dict[str, Any]:
    exported = getattr(module, "__all__", None)
    if exported is not None:
        return {name: getattr(module, name) for name in exported}
    return {
        name: value
        for name, value in vars(module).items()
        if not name.startswith("_")
        and is_factory(value)
        and getattr(value, "__module__", None) == module.__name__
    }


__all__ = ["Registry"]
