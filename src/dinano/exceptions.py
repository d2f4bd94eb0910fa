from __future__ import annotations

from collections.abc import Sequence


class DINanoError(Exception):
    """Represent a base class for all dinano-specific failures.

    Catch this type when you want to handle any dinano error path without
    matching each concrete exception class individually.
    """


class DINanoAlreadyExistsError(DINanoError):
    """Signal that a dependency name is registered twice.

    Raised by ``Registry.register_one``, ``Registry.register_all``,
    ``Registry.register_mock`` and ``Registry.provides``. Names are unique
    within one registry and registrations never replace each other.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'A dependency named "{name}" already exists.')


class DINanoInvalidTypeError(DINanoError):
    """Signal a registration where a factory callable is required.

    Raised by ``Registry.register_all`` when a mapping entry is a pre-built
    value instead of a callable. Use ``register_one`` for plain values.
    """

    def __init__(self, name: str, type_name: str) -> None:
        self.name = name
        self.type_name = type_name
        super().__init__(
            f'Invalid dependency type "{type_name}" for "{name}", expected a callable.',
        )


class DINanoInvalidNameError(DINanoError):
    """Signal a missing, empty, or non-string registration name."""


class DINanoUnsupportedTypeError(DINanoError):
    """Signal registration of a value that can never become a dependency.

    ``None`` and primitive scalars (strings, bytes, numbers, booleans) are
    rejected. Wrap them in an object or a mapping and register that instead.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f'Got "{type_name}". Expected an object or a function.')


class DINanoUnsupportedResultError(DINanoError):
    """Signal that a factory produced a value that is not an object or function.

    The ``type_name`` attribute carries the observed runtime type, with the
    literal ``"null"`` reported for ``None``.
    """

    def __init__(self, name: str, type_name: str) -> None:
        self.name = name
        self.type_name = type_name
        super().__init__(
            f'Dependency "{name}" evaluated to "{type_name}". '
            "Expected an object or a function.",
        )


class DINanoIncompleteDependencyError(DINanoError):
    """Signal use of a dependency before its build has finished.

    Raised by ``DependencyNode.get_value`` and ``DependencyNode.call`` while the
    node is still unbuilt or building.
    """

    def __init__(self, name: str, operation: str) -> None:
        self.name = name
        self.operation = operation
        super().__init__(
            f'{operation}: an attempt to use the incomplete dependency "{name}".',
        )


class DINanoNotCallableError(DINanoError, TypeError):
    """Signal a call on a built dependency whose value is not callable."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Dependency "{name}" is not callable.')


class DINanoCircularDependencyError(DINanoError):
    """Signal a cycle in the declared inputs of registered factories.

    The ``path`` attribute lists node names from the first repeated node back
    to itself, for example ``["a", "b", "a"]``.
    """

    def __init__(self, path: Sequence[str]) -> None:
        self.path = list(path)
        super().__init__(f"Circular dependency detected: [{' => '.join(self.path)}].")


class DINanoParseError(DINanoError):
    """Signal a declared-input list that is not a plain list of names.

    Raised for parameter lists containing destructuring braces, and for
    signatures whose parameters cannot be bound positionally by name
    (``*args``, ``**kwargs`` or required keyword-only parameters).

    Typical fixes include using plain positional parameters or passing an
    explicit ``dependencies=...`` declaration during registration.
    """

    def __init__(self, parameters: str) -> None:
        self.parameters = parameters
        super().__init__(
            f'An invalid way of declaring dependency names => "({parameters})". '
            "Must be a plain comma separated list.",
        )


class DINanoUnknownDependencyError(DINanoError):
    """Signal a declared input with no matching registered node."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Cannot find a dependency with the given name: "{name}".')


class DINanoFrozenDependencyError(DINanoError, AttributeError):
    """Signal an attempt to mutate a frozen dependency value.

    Built values of non-mock nodes are handed out read-only. Register test
    doubles through ``Registry.register_mock`` to keep them mutable.
    """


class DINanoRegistryClosedError(DINanoError):
    """Signal use of a registry after ``invoke`` has started.

    A registry is a single-use coordinator: registrations must finish before
    ``invoke`` and the returned mapping is the terminal artifact.
    """
