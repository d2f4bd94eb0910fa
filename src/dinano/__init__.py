from dinano._internal.bootstrap import init
from dinano._internal.freezing import FrozenDependency
from dinano._internal.node import DependencyNode
from dinano._internal.registry import Registry
from dinano._internal.signature import declared_inputs_of, parse_parameter_list
from dinano._internal.state import NodeState
from dinano.exceptions import (
    DINanoAlreadyExistsError,
    DINanoCircularDependencyError,
    DINanoError,
    DINanoFrozenDependencyError,
    DINanoIncompleteDependencyError,
    DINanoInvalidNameError,
    DINanoInvalidTypeError,
    DINanoNotCallableError,
    DINanoParseError,
    DINanoRegistryClosedError,
    DINanoUnknownDependencyError,
    DINanoUnsupportedResultError,
    DINanoUnsupportedTypeError,
)

__all__ = [
    "DINanoAlreadyExistsError",
    "DINanoCircularDependencyError",
    "DINanoError",
    "DINanoFrozenDependencyError",
    "DINanoIncompleteDependencyError",
    "DINanoInvalidNameError",
    "DINanoInvalidTypeError",
    "DINanoNotCallableError",
    "DINanoParseError",
    "DINanoRegistryClosedError",
    "DINanoUnknownDependencyError",
    "DINanoUnsupportedResultError",
    "DINanoUnsupportedTypeError",
    "DependencyNode",
    "FrozenDependency",
    "NodeState",
    "Registry",
    "declared_inputs_of",
    "init",
    "parse_parameter_list",
]
