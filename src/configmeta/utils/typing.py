# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Annotations utility module"""

from __future__ import annotations

__all__ = [
    "EMPTY",
    "format_annotation",
    "is_bool_annotation",
    "is_none_annotation",
    "same_parameter_types",
]

import inspect
import types
from collections.abc import Sequence
from typing import Any, Final, Union, get_args, get_origin

EMPTY: Final[Any] = inspect.Parameter.empty

_BOOL_ANNOTATION_STRINGS: Final[frozenset[str]] = frozenset(
    {
        "bool",
        "bool | None",
        "None | bool",
        "Optional[bool]",
        "typing.Optional[bool]",
    }
)


def is_none_annotation(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation == "None"
    return annotation is None or annotation is types.NoneType


def is_bool_annotation(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation in _BOOL_ANNOTATION_STRINGS
    if annotation is bool:
        return True
    if get_origin(annotation) in (Union, types.UnionType):
        return set(get_args(annotation)) == {bool, types.NoneType}
    return False


def same_parameter_types(lhs: Sequence[Any], rhs: Sequence[Any]) -> bool:
    # An unannotated parameter matches anything
    if len(lhs) != len(rhs):
        return False
    return all(a is EMPTY or b is EMPTY or a == b for a, b in zip(lhs, rhs))


def format_annotation(annotation: Any) -> str:
    if annotation is EMPTY:
        return "Any"
    if isinstance(annotation, str):
        return annotation
    return inspect.formatannotation(annotation)
