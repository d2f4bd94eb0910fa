"""FastAPI integration through ``dinano_lifespan``.

This module demonstrates application wiring without network startup:

1. A registry holding configuration, helpers and a router factory.
2. ``dinano_lifespan`` building the graph on startup and including the router.
3. ``Module("helpers")`` serving a built value to an app-level route.
4. In-process calls through ``TestClient``.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from dinano import Registry
from dinano.integrations.fastapi import Module, dinano_lifespan


class Helpers:
    def __init__(self, conf: Any) -> None:
        self.heads_offset = conf["heads_offset"]

    def flip(self, roll: float) -> str:
        return "heads" if roll + self.heads_offset > 0.5 else "tails"


def make_controller(conf: Any, helpers: Any) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse)
    def hello() -> str:
        return f"Hello from {conf['controller_from']}."

    @router.get("/flip-a-coin/{roll}", response_class=PlainTextResponse)
    def flip_a_coin(roll: float) -> str:
        return f"It is {helpers.flip(roll)}."

    return router


def main() -> None:
    registry = Registry()
    registry.register_one({"heads_offset": 0.3, "controller_from": "controller"}, "conf")
    registry.register_all({"helpers": Helpers, "controller": make_controller})
    app = FastAPI(lifespan=dinano_lifespan(registry))

    @app.get("/offset")
    def offset(helpers: Any = Module("helpers")) -> dict[str, float]:
        return {"heads_offset": helpers.heads_offset}

    with TestClient(app) as client:
        hello = client.get("/").text
        heads = client.get("/flip-a-coin/0.4").text
        tails = client.get("/flip-a-coin/0.1").text
        offset_json = json.dumps(client.get("/offset").json(), separators=(",", ":"))

    print(hello)  # => Hello from controller.
    print(heads)  # => It is heads.
    print(tails)  # => It is tails.
    print(f"offset={offset_json}")  # => offset={"heads_offset":0.3}


if __name__ == "__main__":
    main()
