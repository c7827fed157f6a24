# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configuration markers module

Markers are the facts attached to the methods of a configuration class:

    class ServerConfig:
        @config("server.port")
        @deprecated_config("port", "http-port")
        @config_description("Port the HTTP server listens to")
        def set_port(self, port: int) -> None:
            ...

Decorators only record the markers; their content is validated when the class is described.
"""

from __future__ import annotations

__all__ = [
    "CurrentName",
    "DeprecatedNames",
    "Description",
    "Marker",
    "config",
    "config_description",
    "deprecated_config",
    "get_marker",
    "get_markers",
    "has_config_marker",
]

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, TypeAlias, TypeVar, final, overload

from .utils.functools import unwrap_method

_MARKERS_ATTRIBUTE: Final[str] = "__config_markers__"

_EMPTY_MARKERS: Final[Mapping[type[Any], Any]] = MappingProxyType({})


@final
@dataclass(frozen=True, slots=True)
class CurrentName:
    value: str


@final
@dataclass(frozen=True, slots=True)
class DeprecatedNames:
    values: tuple[str, ...]


@final
@dataclass(frozen=True, slots=True)
class Description:
    value: str


Marker: TypeAlias = CurrentName | DeprecatedNames | Description

_M = TypeVar("_M", CurrentName, DeprecatedNames, Description)

_MARKER_DECORATOR_NAMES: Final[Mapping[type[Any], str]] = MappingProxyType(
    {
        CurrentName: "config",
        DeprecatedNames: "deprecated_config",
        Description: "config_description",
    }
)


def config[_F](name: str, /) -> Callable[[_F], _F]:
    """Declare the current property name bound to the decorated getter or setter."""
    return _marker_decorator(CurrentName(name))


def deprecated_config[_F](*names: str) -> Callable[[_F], _F]:
    """Declare property names still accepted for backward compatibility."""
    return _marker_decorator(DeprecatedNames(tuple(names)))


def config_description[_F](text: str, /) -> Callable[[_F], _F]:
    return _marker_decorator(Description(text))


def _marker_decorator[_F](marker: Marker) -> Callable[[_F], _F]:
    def decorator(func: _F, /) -> _F:
        target: Any = unwrap_method(func)
        if not callable(target):
            raise TypeError(f"@{_MARKER_DECORATOR_NAMES[type(marker)]} can only decorate functions, got {func!r}")
        markers: dict[type[Any], Marker] = dict(getattr(target, _MARKERS_ATTRIBUTE, _EMPTY_MARKERS))
        if type(marker) in markers:
            raise TypeError(f"@{_MARKER_DECORATOR_NAMES[type(marker)]} applied twice on {target.__qualname__}")
        markers[type(marker)] = marker
        setattr(target, _MARKERS_ATTRIBUTE, MappingProxyType(markers))
        return func

    return decorator


def get_markers(func: Any) -> Mapping[type[Any], Marker]:
    return getattr(unwrap_method(func), _MARKERS_ATTRIBUTE, _EMPTY_MARKERS)


@overload
def get_marker(func: Any, kind: type[_M]) -> _M | None: ...


@overload
def get_marker(func: Any, kind: type[Any]) -> Marker | None: ...


def get_marker(func: Any, kind: type[Any]) -> Marker | None:
    return get_markers(func).get(kind)


def has_config_marker(func: Any) -> bool:
    markers = get_markers(func)
    return CurrentName in markers or DeprecatedNames in markers
