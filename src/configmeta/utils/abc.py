# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Abstract classes utility module"""

from __future__ import annotations

__all__ = [
    "abstractmethods",
    "isabstractclass",
    "isprotocolclass",
    "isuninstantiable",
]

from inspect import isabstract as isabstractclass

from typing_extensions import is_protocol


def isprotocolclass(cls: type) -> bool:
    # Only the Protocol class itself, not the concrete classes implementing it
    return bool(is_protocol(cls))


def isuninstantiable(cls: type) -> bool:
    return isabstractclass(cls) or isprotocolclass(cls)


def abstractmethods(cls: type) -> tuple[str, ...]:
    return tuple(sorted(getattr(cls, "__abstractmethods__", ())))
