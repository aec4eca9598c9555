"""Shared fixtures for unit tests."""

from collections.abc import Callable
from typing import Any

import pytest

from convtest.reports.base import Reporter
from convtest.testing import StaticNamespace, expect


class NullReporter(Reporter):
    """Silent reporter for testing."""

    def __init__(self) -> None:
        self.no_tests_calls = 0
        self.completed: list[tuple[Any, Any]] = []

    def on_no_tests_found(self) -> None:
        self.no_tests_calls += 1

    def on_run_complete(self, metadata, results) -> None:
        self.completed.append((metadata, results))


class CallLog:
    """Builds units that record their invocations in one shared list."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.args: dict[str, list[tuple[Any, ...]]] = {}

    def hook(self, name: str, returns: Any = True) -> tuple[str, Callable[..., Any]]:
        def fn(*args: Any) -> Any:
            self.calls.append(name)
            self.args.setdefault(name, []).append(args)
            return returns

        return name, fn

    def test(self, name: str, expected: Any = 1, actual: Any = 1) -> tuple[str, Callable[..., Any]]:
        def fn() -> Any:
            self.calls.append(name)
            return expect(expected, actual)

        return name, fn

    def namespace(self, *units: tuple[str, Callable[..., Any]]) -> StaticNamespace:
        return StaticNamespace(units)


@pytest.fixture
def null_reporter() -> NullReporter:
    """Provide a silent reporter for tests."""
    return NullReporter()


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()
