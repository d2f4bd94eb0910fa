"""Async factories: mix coroutine and plain factories in one graph.

Consumers never see pending coroutines. A sync factory depending on an async
one receives the resolved value, and a shared async input runs once even
when several consumers wait for it at the same time.
"""

from __future__ import annotations

import asyncio
from typing import Any

from dinano import Registry


async def main() -> None:
    calls = {"pool": 0}

    async def make_pool(conf: Any) -> dict[str, Any]:
        calls["pool"] += 1
        await asyncio.sleep(0)
        return {"dsn": conf["dsn"]}

    def make_users(pool: Any) -> dict[str, Any]:
        return {"pool": pool, "table": "users"}

    async def make_orders(pool: Any) -> dict[str, Any]:
        await asyncio.sleep(0)
        return {"pool": pool, "table": "orders"}

    registry = Registry()
    registry.register_one({"dsn": "sqlite://"}, "conf")
    registry.register_all({"orders": make_orders, "users": make_users, "pool": make_pool})

    modules = await registry.invoke()

    print(f"pool_calls={calls['pool']}")  # => pool_calls=1
    print(f"users_dsn={modules['users']['pool']['dsn']}")  # => users_dsn=sqlite://
    same_pool = modules["users"]["pool"] is modules["orders"]["pool"]
    print(f"same_pool={same_pool}")  # => same_pool=True
    print(f"orders_table={modules['orders']['table']}")  # => orders_table=orders


if __name__ == "__main__":
    asyncio.run(main())
