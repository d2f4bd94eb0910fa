"""Pydantic settings as a configuration dependency.

``register_settings`` registers a ``BaseSettings`` class under a name. The
settings load from the environment when the graph is built, and consumers
receive them through a parameter with that name.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from dinano import Registry
from dinano.integrations.pydantic_settings import register_settings


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EXAMPLE_APP_")

    host: str = "localhost"
    port: int = 8080


class Server:
    def __init__(self, conf: Any) -> None:
        self.address = f"{conf.host}:{conf.port}"


async def main() -> None:
    os.environ["EXAMPLE_APP_PORT"] = "9000"

    registry = Registry()
    register_settings(registry, AppSettings, "conf")
    registry.register_all({"server": Server})

    modules = await registry.invoke()

    print(f"address={modules['server'].address}")  # => address=localhost:9000
    print(f"is_settings={isinstance(modules['conf'], AppSettings)}")  # => is_settings=True


if __name__ == "__main__":
    asyncio.run(main())
