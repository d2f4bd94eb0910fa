from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from dinano._internal.freezing import freeze
from dinano._internal.state import Building, Ready
from dinano._internal.type_checks import unsupported_type_name
from dinano.exceptions import DINanoUnknownDependencyError, DINanoUnsupportedResultError

if TYPE_CHECKING:
    from dinano._internal.node import DependencyNode

logger = logging.getLogger(__name__)


async def build_node(node: DependencyNode, nodes: Mapping[str, DependencyNode]) -> Any:
    """Build ``node`` and its transitive inputs, returning the ready value.

    Each node is built at most once. A ready node returns its value, a node
    with a build in flight returns the outcome of that same build, and an
    unbuilt node starts one. The in-flight future is installed before the
    first suspension point, so concurrent consumers always share it.

    Args:
        node: Node to build.
        nodes: Read-only view of every node in the graph, keyed by name.

    Returns:
        The built value, frozen unless the node opted out.

    Raises:
        DINanoUnknownDependencyError: If a declared input has no node.
        DINanoUnsupportedResultError: If a factory produced a primitive value.

    """
    state = node.state
    if isinstance(state, Ready):
        return state.value
    if isinstance(state, Building):
        return await asyncio.shield(state.future)

    future = asyncio.get_running_loop().create_task(
        _instantiate(node, nodes),
        name=f"dinano-build:{node.name}",
    )
    node.transition(Building(future))
    return await asyncio.shield(future)


async def _instantiate(node: DependencyNode, nodes: Mapping[str, DependencyNode]) -> Any:
    input_names = node.get_declared_inputs()
    input_nodes = [_input_node(nodes, name) for name in input_names]
    inputs = await asyncio.gather(*(build_node(input_node, nodes) for input_node in input_nodes))

    logger.debug("Instantiating dependency %r with inputs %s", node.name, list(input_names))
    instance = node.factory(*inputs)
    if inspect.isawaitable(instance):
        instance = await instance

    type_name = unsupported_type_name(instance)
    if type_name is not None:
        raise DINanoUnsupportedResultError(node.name, type_name)

    value = freeze(instance, node.name) if node.freezes else instance
    node.transition(Ready(value))
    return value


def _input_node(nodes: Mapping[str, DependencyNode], name: str) -> DependencyNode:
    try:
        return nodes[name]
    except KeyError:
        raise DINanoUnknownDependencyError(name) from None


__all__ = ["build_node"]
