"""Common error classes for troubleshooting.

This module triggers representative error paths and prints the error details
so you can recognize each category quickly. Graph errors surface from
``invoke`` before any factory runs; registration errors surface immediately.
"""

from __future__ import annotations

import asyncio

from dinano import (
    DependencyNode,
    DINanoAlreadyExistsError,
    DINanoCircularDependencyError,
    DINanoIncompleteDependencyError,
    DINanoInvalidTypeError,
    DINanoParseError,
    DINanoRegistryClosedError,
    DINanoUnknownDependencyError,
    DINanoUnsupportedResultError,
    DINanoUnsupportedTypeError,
    Registry,
)


async def main() -> None:
    registry = Registry()
    registry.register_all({"a": lambda b: object(), "b": lambda a: object()})
    try:
        await registry.invoke()
    except DINanoCircularDependencyError as error:
        print(f"circular={error.path}")  # => circular=['a', 'b', 'a']

    registry = Registry()
    registry.register_all({"service": lambda repository: object()})
    try:
        await registry.invoke()
    except DINanoUnknownDependencyError as error:
        print(f"unknown={error.name}")  # => unknown=repository

    registry = Registry()
    registry.register_all({"port": lambda: 8080})
    try:
        await registry.invoke()
    except DINanoUnsupportedResultError as error:
        print(f"result={error.name}:{error.type_name}")  # => result=port:int

    try:
        Registry().register_one(None, "conf")
    except DINanoUnsupportedTypeError as error:
        print(f"unsupported={error.type_name}")  # => unsupported=null

    try:
        Registry().register_all({"conf": {"port": 8080}})
    except DINanoInvalidTypeError as error:
        print(f"invalid_type={error.type_name}")  # => invalid_type=dict

    registry = Registry()
    registry.register_one({}, "conf")
    try:
        registry.register_one({}, "conf")
    except DINanoAlreadyExistsError as error:
        print(f"duplicate={error.name}")  # => duplicate=conf

    try:
        Registry().register_all({"handler": lambda *args: object()})
    except DINanoParseError as error:
        print(f"parse={error.parameters}")  # => parse=*args

    node = DependencyNode("helpers", lambda: object())
    try:
        node.get_value()
    except DINanoIncompleteDependencyError as error:
        print(f"incomplete={error.operation}:{error.name}")  # => incomplete=get:helpers

    registry = Registry()
    await registry.invoke()
    try:
        registry.register_one({}, "late")
    except DINanoRegistryClosedError as error:
        print(f"closed={type(error).__name__}")  # => closed=DINanoRegistryClosedError


if __name__ == "__main__":
    asyncio.run(main())
