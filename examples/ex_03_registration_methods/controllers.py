"""Factories registered together with ``Registry.register_all(module)``."""

from __future__ import annotations

from typing import Any

__all__ = ["controller", "helpers"]


class Helpers:
    def __init__(self, heads_offset: float) -> None:
        self.heads_offset = heads_offset

    def flip(self, roll: float) -> str:
        return "heads" if roll + self.heads_offset > 0.5 else "tails"


class Controller:
    def __init__(self, greeting_from: str, helpers: Helpers) -> None:
        self.greeting_from = greeting_from
        self.helpers = helpers

    def greet(self) -> str:
        return f"Hello from {self.greeting_from}."

    def flip_a_coin(self, roll: float) -> str:
        return f"It is {self.helpers.flip(roll)}."


def helpers(conf: Any) -> Helpers:
    return Helpers(conf["heads_offset"])


def controller(conf: Any, helpers: Helpers) -> Controller:
    return Controller(conf["greeting_from"], helpers)
