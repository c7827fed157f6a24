# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configuration problems aggregation module

Validation steps never raise: they record their diagnostics into a Problems sink
and keep going, so that a single description reports every issue at once.
"""

from __future__ import annotations

__all__ = [
    "NULL_MONITOR",
    "ConfigurationDescriptionError",
    "LoggingMonitor",
    "Monitor",
    "Problem",
    "ProblemKind",
    "Problems",
    "Severity",
    "WarningsMonitor",
]

import logging
import warnings
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum, auto, unique
from typing import Any, Final, Protocol, final, runtime_checkable

from .warnings import ConfigurationProblemWarning


@unique
class Severity(StrEnum):
    ERROR = "Error"
    WARNING = "Warning"


@unique
class ProblemKind(StrEnum):
    STRUCTURAL = auto()
    ANNOTATION = auto()
    SIGNATURE = auto()
    BINDING = auto()
    DUPLICATE_ATTRIBUTE = auto()
    EMPTY_TYPE = auto()
    VISIBILITY = auto()
    DEPRECATION = auto()


@final
@dataclass(frozen=True, slots=True)
class Problem:
    kind: ProblemKind
    severity: Severity
    message: str
    subject: Any = None

    def __str__(self) -> str:
        return f"{self.severity}: {self.message}"

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


@runtime_checkable
class Monitor(Protocol):
    def on_error(self, problem: Problem, /) -> None: ...

    def on_warning(self, problem: Problem, /) -> None: ...


@final
class _NullMonitor:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NULL_MONITOR"

    def on_error(self, problem: Problem, /) -> None:
        pass

    def on_warning(self, problem: Problem, /) -> None:
        pass


NULL_MONITOR: Final[Monitor] = _NullMonitor()


class LoggingMonitor:
    __slots__ = ("__logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        if logger is None:
            logger = logging.getLogger(__package__)
        self.__logger: logging.Logger = logger

    def __repr__(self) -> str:
        return f"{type(self).__name__}(logger={self.__logger.name!r})"

    @property
    def logger(self) -> logging.Logger:
        return self.__logger

    def on_error(self, problem: Problem, /) -> None:
        self.__logger.error("[%s] %s", problem.kind, problem.message)

    def on_warning(self, problem: Problem, /) -> None:
        self.__logger.warning("[%s] %s", problem.kind, problem.message)


class WarningsMonitor:
    __slots__ = ("__category",)

    def __init__(self, category: type[Warning] = ConfigurationProblemWarning) -> None:
        self.__category: type[Warning] = category

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.__category.__qualname__})"

    def on_error(self, problem: Problem, /) -> None:
        warnings.warn(str(problem), category=self.__category, stacklevel=2)

    def on_warning(self, problem: Problem, /) -> None:
        warnings.warn(str(problem), category=self.__category, stacklevel=2)


@final
class Problems:
    __slots__ = ("__problems", "__monitor")

    def __init__(self, monitor: Monitor = NULL_MONITOR) -> None:
        self.__problems: list[Problem] = []
        self.__monitor: Monitor = monitor

    def __repr__(self) -> str:
        return f"{type(self).__name__}(errors={len(self.errors)}, warnings={len(self.warnings)})"

    def __iter__(self) -> Iterator[Problem]:
        return iter(self.__problems)

    def __len__(self) -> int:
        return len(self.__problems)

    def add_error(self, kind: ProblemKind, subject: Any, message: str, /, *args: Any) -> Problem:
        problem = Problem(kind, Severity.ERROR, _format(message, args), subject)
        self.__problems.append(problem)
        self.__monitor.on_error(problem)
        return problem

    def add_warning(self, kind: ProblemKind, subject: Any, message: str, /, *args: Any) -> Problem:
        problem = Problem(kind, Severity.WARNING, _format(message, args), subject)
        self.__problems.append(problem)
        self.__monitor.on_warning(problem)
        return problem

    def has_errors(self) -> bool:
        return any(problem.is_error for problem in self.__problems)

    @property
    def errors(self) -> tuple[Problem, ...]:
        return tuple(problem for problem in self.__problems if problem.is_error)

    @property
    def warnings(self) -> tuple[Problem, ...]:
        return tuple(problem for problem in self.__problems if not problem.is_error)

    def throw_if_has_errors(self) -> None:
        if self.has_errors():
            raise ConfigurationDescriptionError(self.__problems)

    @property
    def monitor(self) -> Monitor:
        return self.__monitor


class ConfigurationDescriptionError(Exception):
    def __init__(self, problems: Iterable[Problem]) -> None:
        problems = tuple(problems)
        if not any(problem.is_error for problem in problems):
            raise ValueError("ConfigurationDescriptionError needs at least one error")
        super().__init__(_format_report(problems))
        self.problems: tuple[Problem, ...] = problems

    @property
    def errors(self) -> tuple[Problem, ...]:
        return tuple(problem for problem in self.problems if problem.is_error)


def _format(message: str, args: tuple[Any, ...]) -> str:
    if not args:
        return message
    return message % args


def _format_report(problems: tuple[Problem, ...]) -> str:
    nb_errors = sum(1 for problem in problems if problem.is_error)
    nb_warnings = len(problems) - nb_errors

    lines: list[str] = ["Configuration errors:", ""]
    lines.extend(f"{index}) {problem}" for index, problem in enumerate(problems, start=1))
    lines.append("")
    summary = _plural(nb_errors, "error")
    if nb_warnings:
        summary = f"{summary}, {_plural(nb_warnings, 'warning')}"
    lines.append(summary)
    return "\n".join(lines)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"
