"""Mocks: swap a collaborator for a test double that stays mutable.

Built values are read-only by default. ``register_mock`` registers a double
under the production name, and its value can still be inspected and
reconfigured after the graph is built.
"""

from __future__ import annotations

import asyncio
from typing import Any

from dinano import DINanoFrozenDependencyError, Registry


class FakeMailer:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.sender = "noreply@example.com"

    def send(self, to: str) -> None:
        self.sent.append(to)


class Signup:
    def __init__(self, mailer: Any) -> None:
        self.mailer = mailer

    def register(self, email: str) -> None:
        self.mailer.send(email)


async def main() -> None:
    registry = Registry()
    registry.register_mock("mailer", FakeMailer)
    registry.register_one(Signup, "signup")

    modules = await registry.invoke()
    modules["signup"].register("ada@example.com")
    modules["mailer"].sender = "tests@example.com"

    print(f"sent={modules['mailer'].sent}")  # => sent=['ada@example.com']
    print(f"sender={modules['mailer'].sender}")  # => sender=tests@example.com

    try:
        modules["signup"].mailer = FakeMailer()
    except DINanoFrozenDependencyError:
        print("signup_is_read_only=True")  # => signup_is_read_only=True


if __name__ == "__main__":
    asyncio.run(main())
