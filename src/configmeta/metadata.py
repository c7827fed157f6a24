# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configuration metadata module

describe() computes, without instantiating it, how a configuration class exposes its settable
attributes: which methods form an attribute, which property names it answers to, and whether
the class can be configured at all. Every violation is collected in the returned metadata.

describe_or_fail() does the same but raises ConfigurationDescriptionError on any error.
"""

from __future__ import annotations

__all__ = [
    "AttributeMetadata",
    "TypeMetadata",
    "describe",
    "describe_or_fail",
]

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Final, Literal, cast, final

from typing_extensions import assert_never

from .environ import default_monitor
from .inspector import ClassDescriptor, Constructor, Method, TypeDescriptor, find_config_methods, find_misplaced_config_methods
from .markers import CurrentName, DeprecatedNames, Description
from .problems import ConfigurationDescriptionError, Monitor, Problem, ProblemKind, Problems
from .utils.typing import is_bool_annotation, is_none_annotation

logger = logging.getLogger(__name__)

# The underscore following the prefix belongs to the prefix: 'get_port' and 'getPort' give 'port' and 'Port'
_ACCESSOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<prefix>set|get|is)(?P<stem>_?(?P<attribute>[^_].*))$")


@final
@dataclass(frozen=True, eq=False, slots=True, kw_only=True)
class AttributeMetadata:
    owning_type: type
    name: str
    setter: Method
    getter: Method | None = None
    property_name: str | None = None
    deprecated_names: frozenset[str] = field(default_factory=frozenset)
    description: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.setter, Method):
            raise TypeError(f"Attribute {self.name!r}: setter is required")
        deprecated_names = frozenset(self.deprecated_names)
        if self.property_name is None and not deprecated_names:
            raise ValueError(f"Attribute {self.name!r}: Either property_name or deprecated_names must be supplied")
        object.__setattr__(self, "deprecated_names", deprecated_names)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeMetadata):
            return NotImplemented
        return self.owning_type is other.owning_type and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.owning_type, self.name))

    @property
    def sorted_deprecated_names(self) -> tuple[str, ...]:
        return tuple(sorted(self.deprecated_names))

    @property
    def property_names(self) -> tuple[str, ...]:
        """Every property name bound to this attribute, the current one first."""
        if self.property_name is None:
            return self.sorted_deprecated_names
        return (self.property_name, *self.sorted_deprecated_names)

    @property
    def is_write_only(self) -> bool:
        return self.getter is None


@final
@dataclass(frozen=True, eq=False, slots=True)
class TypeMetadata:
    target_type: type
    constructor: Constructor | None
    attributes: Mapping[str, AttributeMetadata]
    problems: tuple[Problem, ...]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target_type={self.target_type.__qualname__})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeMetadata):
            return NotImplemented
        return self.target_type is other.target_type

    def __hash__(self) -> int:
        return hash(self.target_type)

    @property
    def errors(self) -> tuple[Problem, ...]:
        return tuple(problem for problem in self.problems if problem.is_error)

    @property
    def warnings(self) -> tuple[Problem, ...]:
        return tuple(problem for problem in self.problems if not problem.is_error)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def describe(config_class: type | TypeDescriptor, /, *, monitor: Monitor | None = None) -> TypeMetadata:
    descriptor = _as_descriptor(config_class)
    if monitor is None:
        monitor = default_monitor()

    logger.debug("Describing configuration class %s", descriptor.name)
    metadata = _MetadataBuilder(descriptor, monitor).build()
    logger.debug(
        "Configuration class %s: %d attribute(s), %d error(s), %d warning(s)",
        descriptor.name,
        len(metadata.attributes),
        len(metadata.errors),
        len(metadata.warnings),
    )
    return metadata


def describe_or_fail(config_class: type | TypeDescriptor, /, *, monitor: Monitor | None = None) -> TypeMetadata:
    metadata = describe(config_class, monitor=monitor)
    if metadata.errors:
        raise ConfigurationDescriptionError(metadata.problems)
    return metadata


def _as_descriptor(config_class: type | TypeDescriptor) -> TypeDescriptor:
    if isinstance(config_class, type):
        return ClassDescriptor(config_class)
    if isinstance(config_class, TypeDescriptor):
        return config_class
    raise TypeError(f"Expected a class or a TypeDescriptor, got {config_class!r}")


@final
class _MetadataBuilder:
    __slots__ = ("__descriptor", "__problems")

    def __init__(self, descriptor: TypeDescriptor, monitor: Monitor) -> None:
        self.__descriptor: TypeDescriptor = descriptor
        self.__problems: Problems = Problems(monitor)

    def build(self) -> TypeMetadata:
        descriptor = self.__descriptor
        problems = self.__problems

        constructor = self.__validate_structure()

        attributes: dict[str, AttributeMetadata] = {}
        for config_method in find_config_methods(descriptor):
            attribute = self.__build_attribute_metadata(config_method)
            if attribute is None:
                continue
            if (existing := attributes.get(attribute.name)) is None:
                attributes[attribute.name] = attribute
                self.__check_deprecated_only(attribute, config_method)
                continue
            merged = _merge_accessor_pair(existing, attribute)
            if merged is None:
                problems.add_error(
                    ProblemKind.DUPLICATE_ATTRIBUTE,
                    config_method,
                    "Configuration class [%s] Multiple methods are annotated for @config attribute [%s]",
                    descriptor.name,
                    attribute.name,
                )
                continue
            attributes[attribute.name] = merged

        self.__check_misplaced_config_methods()

        if not problems.has_errors() and not attributes:
            problems.add_error(
                ProblemKind.EMPTY_TYPE,
                descriptor.target,
                "Configuration class [%s] does not have any @config markers",
                descriptor.name,
            )

        return TypeMetadata(
            target_type=descriptor.target,
            constructor=constructor,
            attributes=MappingProxyType(dict(sorted(attributes.items()))),
            problems=tuple(problems),
        )

    def __validate_structure(self) -> Constructor | None:
        descriptor = self.__descriptor
        problems = self.__problems

        if descriptor.is_abstract:
            if abstract_methods := descriptor.abstract_methods():
                problems.add_error(
                    ProblemKind.STRUCTURAL,
                    descriptor.target,
                    "Config class [%s] is abstract (abstract methods: %s)",
                    descriptor.name,
                    ", ".join(abstract_methods),
                )
            else:
                problems.add_error(ProblemKind.STRUCTURAL, descriptor.target, "Config class [%s] is abstract", descriptor.name)
        if not descriptor.is_public:
            problems.add_error(ProblemKind.STRUCTURAL, descriptor.target, "Config class [%s] is not public", descriptor.name)

        constructor = descriptor.no_arg_constructor()
        if constructor is None:
            problems.add_error(
                ProblemKind.STRUCTURAL,
                descriptor.target,
                "Configuration class [%s] does not have a public no-arg constructor",
                descriptor.name,
            )
        elif not constructor.is_public:
            problems.add_error(ProblemKind.STRUCTURAL, constructor, "Constructor [%s] is not public", constructor)
        return constructor

    def __validate_markers(self, config_method: Method) -> bool:
        problems = self.__problems
        markers = config_method.markers
        config = markers.get(CurrentName)
        deprecated_config = markers.get(DeprecatedNames)

        if config is None and deprecated_config is None:
            problems.add_error(
                ProblemKind.ANNOTATION,
                config_method,
                "Method [%s] must have either @config or @deprecated_config markers",
                config_method,
            )
            return False

        is_valid = True

        if config is not None and not _is_valid_property_name(config.value):
            problems.add_error(ProblemKind.ANNOTATION, config_method, "@config method [%s] marker has an empty value", config_method)
            is_valid = False

        if deprecated_config is not None:
            if not deprecated_config.values:
                problems.add_error(
                    ProblemKind.ANNOTATION,
                    config_method,
                    "@deprecated_config method [%s] marker has an empty list",
                    config_method,
                )
                is_valid = False

            for entry in deprecated_config.values:
                if not _is_valid_property_name(entry):
                    problems.add_error(
                        ProblemKind.ANNOTATION,
                        config_method,
                        "@deprecated_config method [%s] marker contains an empty or non-string value",
                        config_method,
                    )
                    is_valid = False
                elif config is not None and entry == config.value:
                    problems.add_error(
                        ProblemKind.ANNOTATION,
                        config_method,
                        "@config property name '%s' appears in @deprecated_config marker for method [%s]",
                        config.value,
                        config_method,
                    )
                    is_valid = False

        return is_valid

    def __build_attribute_metadata(self, config_method: Method) -> AttributeMetadata | None:
        if not self.__validate_markers(config_method):
            return None

        problems = self.__problems
        markers = config_method.markers

        config = markers.get(CurrentName)
        property_name: str | None = config.value if isinstance(config, CurrentName) else None

        deprecated_config = markers.get(DeprecatedNames)
        deprecated_names: tuple[str, ...] = deprecated_config.values if isinstance(deprecated_config, DeprecatedNames) else ()

        config_description = markers.get(Description)
        description: str | None = config_description.value if isinstance(config_description, Description) else None

        # determine the attribute name
        accessor = _ACCESSOR_PATTERN.match(config_method.name)
        if accessor is None:
            problems.add_error(ProblemKind.SIGNATURE, config_method, "@config method [%s] is not a valid getter or setter", config_method)
            return None

        stem, attribute_name = accessor.group("stem", "attribute")
        prefix = cast(Literal["set", "get", "is"], accessor.group("prefix"))
        getter: Method | None
        setter: Method | None

        match prefix:
            case "set":
                if config_method.arity != 1:
                    problems.add_error(
                        ProblemKind.SIGNATURE,
                        config_method,
                        "@config setter [%s] does not have exactly one parameter",
                        config_method,
                    )
                # it is ok to have a write only attribute
                getter = self.__find_getter(stem)
                setter = config_method
            case "get":
                if config_method.arity != 0:
                    problems.add_error(ProblemKind.SIGNATURE, config_method, "@config getter [%s] has parameters", config_method)
                if is_none_annotation(config_method.return_type):
                    problems.add_error(ProblemKind.SIGNATURE, config_method, "@config getter [%s] does not return anything", config_method)
                getter = config_method
                setter = self.__find_setter(config_method, stem)
            case "is":
                if config_method.arity != 0:
                    problems.add_error(ProblemKind.SIGNATURE, config_method, "@config is method [%s] has parameters", config_method)
                if not is_bool_annotation(config_method.return_type):
                    problems.add_error(ProblemKind.SIGNATURE, config_method, "@config is method [%s] does not return bool", config_method)
                getter = config_method
                setter = self.__find_setter(config_method, stem)
            case _:
                assert_never(prefix)

        if setter is None:
            return None

        return AttributeMetadata(
            owning_type=self.__descriptor.target,
            name=attribute_name,
            description=description,
            property_name=property_name,
            deprecated_names=frozenset(deprecated_names),
            getter=getter,
            setter=setter,
        )

    def __find_getter(self, stem: str) -> Method | None:
        getter_names = (f"get{stem}", f"is{stem}")
        candidates = [
            method
            for method in self.__descriptor.reachable_methods()
            if method.name in getter_names and method.arity == 0 and _is_accessible(method)
        ]
        for getter_name in getter_names:
            for method in candidates:
                if method.name == getter_name:
                    return method
        return None

    def __find_setter(self, config_method: Method, stem: str) -> Method | None:
        setter_name = f"set{stem}"
        # Resolved like an instance would: overridden or hidden declarations of the bases are not candidates
        setters = [
            method
            for method in self.__descriptor.reachable_methods()
            if method.name == setter_name and method.arity == 1 and _is_accessible(method)
        ]

        # too small
        if not setters:
            self.__problems.add_error(ProblemKind.BINDING, config_method, "No setter for @config method [%s]", config_method)
            return None

        # too big
        if len(setters) > 1:
            self.__problems.add_error(
                ProblemKind.BINDING,
                config_method,
                "Multiple setters found for @config getter [%s]; Move annotation to setter instead: %s",
                config_method,
                _format_methods(setters),
            )
            return None

        # just right
        return setters[0]

    def __check_deprecated_only(self, attribute: AttributeMetadata, config_method: Method) -> None:
        if attribute.property_name is not None:
            return
        self.__problems.add_warning(
            ProblemKind.DEPRECATION,
            config_method,
            "@config attribute [%s] of [%s] is only bound to deprecated property names: %s",
            attribute.name,
            self.__descriptor.name,
            ", ".join(attribute.sorted_deprecated_names),
        )

    def __check_misplaced_config_methods(self) -> None:
        problems = self.__problems
        for method in find_misplaced_config_methods(self.__descriptor):
            if not method.is_public:
                problems.add_error(ProblemKind.VISIBILITY, method, "@config method [%s] is not public", method)
            if method.static:
                problems.add_error(ProblemKind.VISIBILITY, method, "@config method [%s] is static", method)


def _merge_accessor_pair(first: AttributeMetadata, second: AttributeMetadata) -> AttributeMetadata | None:
    # The getter and the setter of one attribute may carry the same markers.
    # Any other collision on an attribute name is a conflict.
    if not _same_accessor(first.getter, second.getter) or not _same_accessor(first.setter, second.setter):
        return None
    if (first.property_name, first.deprecated_names) != (second.property_name, second.deprecated_names):
        return None
    if first.description is not None and second.description is not None and first.description != second.description:
        return None
    if first.description is None and second.description is not None:
        return replace(first, description=second.description)
    return first


def _same_accessor(lhs: Method | None, rhs: Method | None) -> bool:
    # Overrides are resolved on the instance: declaring classes do not matter
    if lhs is None or rhs is None:
        return lhs is rhs
    return lhs.has_signature(rhs.name, rhs.parameter_types)


def _is_valid_property_name(name: Any) -> bool:
    return isinstance(name, str) and bool(name)


def _is_accessible(method: Method) -> bool:
    return method.is_public and not method.static and not method.is_synthetic


def _format_methods(methods: Iterable[Method]) -> str:
    return "[" + ", ".join(map(str, methods)) + "]"
