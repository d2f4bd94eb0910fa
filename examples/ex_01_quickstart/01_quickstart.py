"""Quickstart: wire factories by parameter name.

Register a configuration value and two classes, then build the whole graph
once. Each factory receives the values named by its parameters, already
built, and every value is shared by all of its consumers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from dinano import DINanoFrozenDependencyError, Registry, init


class Database:
    def __init__(self, conf: Any) -> None:
        self.host = conf["host"]


class UserRepository:
    def __init__(self, db: Any) -> None:
        self.db = db


def configure(registry: Registry) -> Awaitable[dict[str, Any]]:
    registry.register_one({"host": "localhost"}, "conf")
    registry.register_all({"repository": UserRepository, "db": Database})
    return registry.invoke()


async def main() -> None:
    modules = await init(configure)

    print(f"names={','.join(modules)}")  # => names=conf,db,repository
    print(f"db_host={modules['repository'].db.host}")  # => db_host=localhost
    print(f"shared={modules['repository'].db is modules['db']}")  # => shared=True

    try:
        modules["db"].host = "remote"
    except DINanoFrozenDependencyError as error:
        print(f"read_only={type(error).__name__}")  # => read_only=DINanoFrozenDependencyError


if __name__ == "__main__":
    asyncio.run(main())
