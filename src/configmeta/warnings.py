# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""configmeta custom warnings module"""

from __future__ import annotations

__all__ = [
    "ConfigMetaEnvironmentWarning",
    "ConfigurationProblemWarning",
]


class ConfigMetaEnvironmentWarning(UserWarning):
    pass


class ConfigurationProblemWarning(UserWarning):
    pass
