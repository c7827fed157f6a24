# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Functions/decorators utility module"""

from __future__ import annotations

__all__ = [
    "forbidden_call",
    "isforbiddencall",
    "unwrap_method",
]

from collections.abc import Callable
from functools import wraps
from typing import Any


def forbidden_call[**_P, _R](func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Mark a callable as not accessible from the outside.

    Applied on __init__ or __new__, the class is considered to have no public constructor.
    """

    @wraps(func)
    def not_callable(*args: Any, **kwargs: Any) -> Any:
        raise TypeError(f"Call to function {func.__qualname__} is forbidden")

    setattr(not_callable, "__forbidden_call__", True)
    return not_callable


def isforbiddencall(func: Any) -> bool:
    return bool(getattr(unwrap_method(func), "__forbidden_call__", False))


def unwrap_method(obj: Any) -> Any:
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj
