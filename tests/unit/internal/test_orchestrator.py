from __future__ import annotations

import asyncio
from typing import Any

import pytest

from dinano._internal.node import DependencyNode
from dinano._internal.orchestrator import build_node
from dinano.exceptions import DINanoUnsupportedResultError


class _Boom(Exception):
    pass


def _nodes(*nodes: DependencyNode) -> dict[str, DependencyNode]:
    return {node.name: node for node in nodes}


@pytest.mark.asyncio
async def test_shared_input_is_instantiated_once() -> None:
    counter = 0

    def make_a() -> dict[str, int]:
        nonlocal counter
        counter += 1
        return {"id": counter}

    a = DependencyNode("a", make_a)
    b = DependencyNode("b", lambda a: {"a": a})
    c = DependencyNode("c", lambda a: {"a": a})
    nodes = _nodes(a, b, c)

    await build_node(a, nodes)
    await build_node(b, nodes)
    await build_node(c, nodes)

    assert counter == 1
    assert b.get_value()["a"] is c.get_value()["a"]


@pytest.mark.asyncio
async def test_concurrent_consumers_share_one_instantiation() -> None:
    counter = 0

    async def make_a() -> object:
        nonlocal counter
        counter += 1
        await asyncio.sleep(0)
        return object()

    a = DependencyNode("a", make_a)
    b = DependencyNode("b", lambda a: {"a": a})
    c = DependencyNode("c", lambda a: {"a": a})
    nodes = _nodes(a, b, c)

    await asyncio.gather(build_node(b, nodes), build_node(c, nodes))

    assert counter == 1


@pytest.mark.asyncio
async def test_inputs_are_bound_positionally_in_declared_order() -> None:
    received: list[Any] = []

    def consumer(second: Any, first: Any) -> object:
        received.extend([second["name"], first["name"]])
        return object()

    first = DependencyNode("first", {"name": "first"})
    second = DependencyNode("second", {"name": "second"})
    node = DependencyNode("consumer", consumer)

    await build_node(node, _nodes(first, second, node))

    assert received == ["second", "first"]


@pytest.mark.asyncio
async def test_sync_consumer_sees_resolved_async_input() -> None:
    async def make_db() -> dict[str, str]:
        await asyncio.sleep(0)
        return {"dsn": "sqlite://"}

    seen: list[Any] = []

    def make_repo(db: Any) -> object:
        seen.append(db)
        return object()

    db = DependencyNode("db", make_db)
    repo = DependencyNode("repo", make_repo)

    await build_node(repo, _nodes(db, repo))

    assert not asyncio.iscoroutine(seen[0])
    assert seen[0]["dsn"] == "sqlite://"


@pytest.mark.asyncio
async def test_async_consumer_sees_resolved_sync_input() -> None:
    seen: list[Any] = []

    async def make_repo(db: Any) -> object:
        seen.append(db)
        await asyncio.sleep(0)
        return object()

    db = DependencyNode("db", lambda: {"dsn": "sqlite://"})
    repo = DependencyNode("repo", make_repo)

    await build_node(repo, _nodes(db, repo))

    assert seen[0]["dsn"] == "sqlite://"


@pytest.mark.asyncio
async def test_inputs_are_ready_before_consumer_runs() -> None:
    async def make_slow() -> object:
        await asyncio.sleep(0.01)
        return object()

    slow = DependencyNode("slow", make_slow)
    fast = DependencyNode("fast", lambda: object())
    states: list[bool] = []

    def make_consumer(slow: Any, fast: Any) -> object:
        states.extend([nodes["slow"].is_ready(), nodes["fast"].is_ready()])
        return object()

    consumer = DependencyNode("consumer", make_consumer)
    nodes = _nodes(slow, fast, consumer)

    await build_node(consumer, nodes)

    assert states == [True, True]


@pytest.mark.asyncio
async def test_factory_returning_awaitable_is_awaited() -> None:
    async def produce() -> dict[str, int]:
        return {"value": 1}

    node = DependencyNode("a", lambda: produce())

    value = await build_node(node, _nodes(node))

    assert value["value"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("result", "type_name"),
    [
        (None, "null"),
        ("text", "str"),
        (b"raw", "bytes"),
        (True, "bool"),
        (42, "int"),
        (4.2, "float"),
        (1j, "complex"),
    ],
)
async def test_primitive_results_are_rejected_with_type_name(result: Any, type_name: str) -> None:
    node = DependencyNode("bad", lambda: result)

    with pytest.raises(DINanoUnsupportedResultError) as exc_info:
        await build_node(node, _nodes(node))

    assert exc_info.value.name == "bad"
    assert exc_info.value.type_name == type_name
    assert not node.is_ready()


@pytest.mark.asyncio
async def test_async_primitive_result_is_rejected() -> None:
    async def produce() -> None:
        return None

    node = DependencyNode("bad", produce)

    with pytest.raises(DINanoUnsupportedResultError, match='"null"'):
        await build_node(node, _nodes(node))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "result",
    [object(), {"a": 1}, [1], (1,), len, type, lambda: None],
    ids=["object", "dict", "list", "tuple", "builtin", "class", "function"],
)
async def test_objects_and_functions_are_accepted(result: Any) -> None:
    node = DependencyNode("ok", lambda: result)

    await build_node(node, _nodes(node))

    assert node.is_ready()


@pytest.mark.asyncio
async def test_sync_factory_error_propagates_unchanged() -> None:
    error = _Boom("sync failure")

    def explode() -> object:
        raise error

    node = DependencyNode("a", explode)

    with pytest.raises(_Boom) as exc_info:
        await build_node(node, _nodes(node))

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_async_factory_error_propagates_to_every_consumer() -> None:
    async def explode() -> object:
        await asyncio.sleep(0)
        raise _Boom("async failure")

    a = DependencyNode("a", explode)
    b = DependencyNode("b", lambda a: object())
    nodes = _nodes(a, b)

    with pytest.raises(_Boom, match="async failure"):
        await build_node(b, nodes)
    with pytest.raises(_Boom, match="async failure"):
        await build_node(a, nodes)

    assert not b.is_ready()
