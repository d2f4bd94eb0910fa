from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias


class NodeState(str, Enum):
    """Name the build phase of a dependency node."""

    UNBUILT = "unbuilt"
    """The factory has not been called yet."""

    BUILDING = "building"
    """A build is in flight; consumers await the shared future."""

    READY = "ready"
    """The value is built and can be handed out."""


@dataclass(frozen=True, slots=True)
class Unbuilt:
    """Build state of a node whose factory has not run."""

    phase = NodeState.UNBUILT


@dataclass(frozen=True, slots=True)
class Building:
    """Build state of a node with an in-flight build."""

    future: asyncio.Future[Any]

    phase = NodeState.BUILDING


@dataclass(frozen=True, slots=True)
class Ready:
    """Build state of a node holding its finished value."""

    value: Any

    phase = NodeState.READY


BuildState: TypeAlias = Unbuilt | Building | Ready
"""Tagged variant over the three build phases. Only ``Ready`` exposes a value."""

UNBUILT = Unbuilt()
