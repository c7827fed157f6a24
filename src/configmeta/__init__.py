# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configuration classes metadata

configmeta describes how a configuration class exposes its settable attributes, so that a binding
mechanism can later populate its instances from key/value property sources.

    from configmeta import config, deprecated_config, describe_or_fail

    class ServerConfig:
        def get_port(self) -> int:
            return self.__port

        @config("server.port")
        @deprecated_config("port")
        def set_port(self, port: int) -> None:
            self.__port = port

    metadata = describe_or_fail(ServerConfig)
    metadata.attributes["port"].property_names  # ('server.port', 'port')
"""

from __future__ import annotations

__all__ = [
    "NULL_MONITOR",
    "AttributeMetadata",
    "ClassDescriptor",
    "ConfigurationDescriptionError",
    "Constructor",
    "CurrentName",
    "DeprecatedNames",
    "Description",
    "LoggingMonitor",
    "Marker",
    "Method",
    "Monitor",
    "Problem",
    "ProblemKind",
    "Problems",
    "Severity",
    "TypeDescriptor",
    "TypeMetadata",
    "WarningsMonitor",
    "config",
    "config_description",
    "deprecated_config",
    "describe",
    "describe_or_fail",
    "find_config_method",
    "find_config_methods",
    "find_misplaced_config_methods",
    "get_marker",
    "get_markers",
    "has_config_marker",
]

__version__ = "1.0.0"


############ Package initialization ############
from .inspector import *
from .markers import *
from .metadata import *
from .problems import *
