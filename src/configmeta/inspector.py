# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configuration class inspection module

Reconstructs, from the flattened set of methods reachable on a class, which declaration
of the hierarchy actually carries the configuration markers.

The hierarchy is walked depth-first: the class itself, then its first base recursively
(the "superclass" chain), then the other bases (mixins, protocols) in declaration order.
"""

from __future__ import annotations

__all__ = [
    "ClassDescriptor",
    "Constructor",
    "Method",
    "TypeDescriptor",
    "find_config_method",
    "find_config_methods",
    "find_misplaced_config_methods",
]

import inspect
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, final, get_overloads, runtime_checkable

from .markers import Marker, get_markers, has_config_marker
from .utils.abc import abstractmethods, isuninstantiable
from .utils.functools import isforbiddencall
from .utils.typing import EMPTY, format_annotation, same_parameter_types


@final
@dataclass(frozen=True, slots=True)
class Method:
    owner: type
    name: str
    parameter_types: tuple[Any, ...]
    return_type: Any = EMPTY
    static: bool = False
    function: Callable[..., Any] = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    @classmethod
    def from_function(cls, owner: type, name: str, function: Callable[..., Any], *, binding: str = "instance") -> Method:
        signature = _signature(function)
        parameters = list(signature.parameters.values())
        if binding != "static":
            # Drop 'self' or 'cls'
            parameters = parameters[1:]
        return cls(
            owner=owner,
            name=name,
            parameter_types=tuple(p.annotation for p in parameters),
            return_type=signature.return_annotation,
            static=binding != "instance",
            function=function,
        )

    def __str__(self) -> str:
        parameters = ", ".join(map(format_annotation, self.parameter_types))
        prefix = "static " if self.static else ""
        return f"{prefix}{self.qualname}({parameters}) -> {format_annotation(self.return_type)}"

    @property
    def qualname(self) -> str:
        return f"{_type_name(self.owner)}.{self.name}"

    @property
    def arity(self) -> int:
        return len(self.parameter_types)

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")

    @property
    def is_synthetic(self) -> bool:
        return self.name.startswith("__") and self.name.endswith("__")

    @property
    def markers(self) -> Mapping[type[Any], Marker]:
        return get_markers(self.function)

    @property
    def is_config_method(self) -> bool:
        return has_config_marker(self.function)

    def has_signature(self, name: str, parameter_types: Sequence[Any]) -> bool:
        return self.name == name and same_parameter_types(self.parameter_types, parameter_types)

    def invoke(self, instance: Any, /, *args: Any) -> Any:
        # Resolved on the instance so that overrides are honoured
        return getattr(instance, self.name)(*args)


@final
@dataclass(frozen=True, slots=True)
class Constructor:
    owner: type
    is_public: bool = True

    def __str__(self) -> str:
        return f"{_type_name(self.owner)}()"

    def __call__(self) -> Any:
        return self.owner()


@runtime_checkable
class TypeDescriptor(Protocol):
    @property
    def target(self) -> type: ...

    @property
    def name(self) -> str: ...

    @property
    def is_abstract(self) -> bool: ...

    @property
    def is_public(self) -> bool: ...

    def abstract_methods(self) -> Sequence[str]: ...

    def no_arg_constructor(self) -> Constructor | None: ...

    def bases(self) -> Sequence[TypeDescriptor]: ...

    def ancestors(self) -> Sequence[TypeDescriptor]:
        """The type itself followed by every parent in method resolution order."""
        ...

    def declared_methods(self) -> Sequence[Method]:
        """Methods declared directly in the type, whatever their visibility."""
        ...

    def reachable_methods(self) -> Sequence[Method]:
        """Methods an instance resolves to, including the inherited ones."""
        ...


@final
class ClassDescriptor:
    __slots__ = ("__cls",)

    def __init__(self, cls: type) -> None:
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got {cls!r}")
        self.__cls: type = cls

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassDescriptor):
            return NotImplemented
        return self.__cls is other.__cls

    def __hash__(self) -> int:
        return hash(self.__cls)

    @property
    def target(self) -> type:
        return self.__cls

    @property
    def name(self) -> str:
        return _type_name(self.__cls)

    @property
    def is_abstract(self) -> bool:
        return isuninstantiable(self.__cls)

    @property
    def is_public(self) -> bool:
        return not any(part.startswith("_") for part in self.__cls.__qualname__.split(".") if part != "<locals>")

    def abstract_methods(self) -> tuple[str, ...]:
        return abstractmethods(self.__cls)

    def no_arg_constructor(self) -> Constructor | None:
        cls = self.__cls
        constructors: list[Callable[..., Any]] = []
        if cls.__init__ is not object.__init__:
            constructors.append(cls.__init__)
        if cls.__new__ is not object.__new__:
            constructors.append(cls.__new__)
        if not all(map(_accepts_no_argument, constructors)):
            return None
        return Constructor(cls, is_public=not any(map(isforbiddencall, constructors)))

    def bases(self) -> tuple[ClassDescriptor, ...]:
        return tuple(ClassDescriptor(base) for base in self.__cls.__bases__ if base is not object)

    def ancestors(self) -> tuple[ClassDescriptor, ...]:
        return tuple(ClassDescriptor(klass) for klass in self.__cls.__mro__ if klass is not object)

    def declared_methods(self) -> tuple[Method, ...]:
        cls = self.__cls
        return tuple(method for name, value in vars(cls).items() for method in _iter_methods(cls, name, value))

    def reachable_methods(self) -> tuple[Method, ...]:
        methods: list[Method] = []
        seen: set[str] = set()
        for klass in self.__cls.__mro__:
            if klass is object:
                continue
            for name, value in vars(klass).items():
                # Any attribute, method or not, hides the ones of the same name in the bases
                if name in seen:
                    continue
                seen.add(name)
                methods.extend(_iter_methods(klass, name, value))
        return tuple(methods)


def find_config_methods(descriptor: TypeDescriptor) -> list[Method]:
    """Find the methods that are marked as configuration methods somewhere in the hierarchy

    Returns the marked declarations, which may belong to a parent of 'descriptor'.
    """
    result: list[Method] = []

    for method in descriptor.reachable_methods():
        if method.is_synthetic or method.static or not method.is_public:
            continue

        config_method = find_config_method(descriptor, method.name, method.parameter_types)
        if config_method is not None and config_method not in result:
            result.append(config_method)

    return result


def find_config_method(descriptor: TypeDescriptor, name: str, parameter_types: Sequence[Any]) -> Method | None:
    for method in descriptor.declared_methods():
        if method.has_signature(name, parameter_types) and method.is_config_method:
            return method

    for base in descriptor.bases():
        config_method = find_config_method(base, name, parameter_types)
        if config_method is not None:
            return config_method

    return None


def find_misplaced_config_methods(descriptor: TypeDescriptor) -> list[Method]:
    """Find the marked methods that find_config_methods() cannot see: private ones and static ones

    Every class of the hierarchy is scanned, overridden declarations included.
    """
    return [
        method
        for ancestor in descriptor.ancestors()
        for method in ancestor.declared_methods()
        if method.is_config_method and (not method.is_public or method.static)
    ]


def _iter_methods(owner: type, name: str, value: Any) -> Iterator[Method]:
    binding: str
    match value:
        case staticmethod():
            binding = "static"
        case classmethod():
            binding = "class"
        case _:
            binding = "instance"
    function: Any = value.__func__ if binding != "instance" else value
    if not inspect.isfunction(function):
        return
    overloads = get_overloads(function)
    if not overloads or has_config_marker(function):
        # A marked implementation is the declaration its markers belong to
        yield Method.from_function(owner, name, function, binding=binding)
        return
    # Otherwise the runtime implementation of an @overload-ed method is not a signature on its own
    for declaration in overloads:
        yield Method.from_function(owner, name, declaration, binding=binding)


def _signature(function: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(function, eval_str=True)
    except Exception:
        # Unresolvable annotations: compare them as written
        return inspect.signature(function)


def _accepts_no_argument(constructor: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(constructor)
    except (TypeError, ValueError):
        # Built-in constructors without signature
        return True
    parameters = list(signature.parameters.values())[1:]
    return all(
        p.default is not p.empty or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        for p in parameters
    )


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
