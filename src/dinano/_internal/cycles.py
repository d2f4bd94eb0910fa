from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from dinano.exceptions import DINanoCircularDependencyError, DINanoUnknownDependencyError

if TYPE_CHECKING:
    from dinano._internal.node import DependencyNode


class CycleDetector:
    """Walk declared inputs depth-first and reject cycles and unknown names.

    One detector instance remembers the nodes it already cleared, so checking
    every node of a registry visits each edge once.
    """

    def __init__(self, nodes: Mapping[str, DependencyNode]) -> None:
        self._nodes = nodes
        self._cleared: set[str] = set()

    def check(self, name: str) -> None:
        """Check the subgraph reachable from ``name``.

        Args:
            name: Name of the node the walk starts from.

        Raises:
            DINanoCircularDependencyError: If a declared input leads back to a
                node already on the walk path.
            DINanoUnknownDependencyError: If a declared input has no node.

        """
        if name not in self._nodes:
            raise DINanoUnknownDependencyError(name)
        self._walk(name)

    def check_all(self) -> None:
        """Check every node in the graph."""
        for name in self._nodes:
            self.check(name)

    def _walk(self, start: str) -> None:
        if start in self._cleared:
            return

        path = [start]
        on_path = {start}
        pending = [iter(self._nodes[start].get_declared_inputs())]
        while pending:
            dependency_name = next(pending[-1], None)
            if dependency_name is None:
                pending.pop()
                finished = path.pop()
                on_path.discard(finished)
                self._cleared.add(finished)
                continue
            if dependency_name not in self._nodes:
                raise DINanoUnknownDependencyError(dependency_name)
            if dependency_name in on_path:
                cycle_start = path.index(dependency_name)
                raise DINanoCircularDependencyError([*path[cycle_start:], dependency_name])
            if dependency_name in self._cleared:
                continue
            path.append(dependency_name)
            on_path.add(dependency_name)
            pending.append(iter(self._nodes[dependency_name].get_declared_inputs()))


def detect_cycle(name: str, nodes: Mapping[str, DependencyNode]) -> None:
    """Raise when the subgraph reachable from ``name`` has a cycle or unknown input."""
    CycleDetector(nodes).check(name)


__all__ = ["CycleDetector", "detect_cycle"]
