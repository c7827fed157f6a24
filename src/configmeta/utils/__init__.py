# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""configmeta's utility package

Introspection helpers shared by the type inspector and the metadata assembler
"""

from __future__ import annotations

__all__ = []  # type: list[str]
