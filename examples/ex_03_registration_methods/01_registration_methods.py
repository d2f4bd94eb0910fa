"""Registration methods: values, mappings, modules, decorators.

1. ``register_one`` for a plain configuration value.
2. ``register_all`` with a module; its ``__all__`` names the factories.
3. ``@registry.provides()`` deriving the name from ``make_banner``.
4. An explicit ``dependencies`` declaration for a factory taking ``*parts``.
"""

from __future__ import annotations

import asyncio
from typing import Any

import controllers

from dinano import Registry


async def main() -> None:
    registry = Registry()
    registry.register_one({"heads_offset": 0.3, "greeting_from": "controller"}, "conf")
    registry.register_all(controllers)

    @registry.provides()
    def make_banner(conf: Any) -> dict[str, str]:
        return {"text": f"Served by {conf['greeting_from']}"}

    def summarize(*parts: Any) -> dict[str, int]:
        return {"parts": len(parts)}

    registry.register_one(summarize, "summary", dependencies="banner, helpers")

    print(f"inputs={registry.node('controller').get_declared_inputs()}")  # => inputs=['conf', 'helpers']

    modules = await registry.invoke()

    print(f"names={','.join(modules)}")  # => names=banner,conf,controller,helpers,summary
    print(modules["controller"].greet())  # => Hello from controller.
    print(modules["controller"].flip_a_coin(0.4))  # => It is heads.
    print(modules["controller"].flip_a_coin(0.1))  # => It is tails.
    print(f"banner={modules['banner']['text']}")  # => banner=Served by controller
    print(f"summary_parts={modules['summary']['parts']}")  # => summary_parts=2


if __name__ == "__main__":
    asyncio.run(main())
