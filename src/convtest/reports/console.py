"""Rich console reporter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from convtest.testing.classify import display_label
from convtest.testing.results import Failed, Summary, TestResult, TestStatus
from convtest.types import GLOBAL_GROUP, Group

if TYPE_CHECKING:
    from convtest.testing.metadata import MetadataModel
    from convtest.testing.results import ResultsModel


_MARKERS = {
    TestStatus.PASSED: "[green]PASS[/green]",
    TestStatus.FAILED: "[red]FAIL[/red]",
    TestStatus.SKIPPED: "[yellow]SKIP[/yellow]",
}


def group_title(group: Group) -> str:
    if group is GLOBAL_GROUP:
        return "(global)"
    if group == "":
        return '""'
    return group


def comparator_name(result: TestResult) -> str | None:
    comparator = result.comparator
    if comparator is None:
        return None
    return getattr(comparator, "__qualname__", None) or repr(comparator)


def format_summary(summary: Summary) -> str:
    return f"{summary.passed} passed, {summary.failed} failed, {summary.skipped} skipped"


class ConsoleReporter:
    """One line per suite, one line per test, details for failures.

    Args:
        console: Rich console to print to (defaults to stdout).
        verbosity: Below 0 prints only the run summary; above 0 also prints
            the extra argument handed to a comparator.
        prefix: Test-name prefix used to derive short test labels.
    """

    def __init__(
        self,
        console: Console | None = None,
        verbosity: int = 0,
        prefix: str | None = None,
    ) -> None:
        self.console = console or Console()
        self.verbosity = verbosity
        self.prefix = prefix

    def on_no_tests_found(self) -> None:
        self.console.print("[yellow]No tests found.[/yellow]")

    def on_run_complete(self, metadata: MetadataModel, results: ResultsModel) -> None:
        if self.verbosity >= 0:
            for group, group_results in results.items():
                suite = metadata[group]
                if not suite.tests:
                    continue
                summary = results.summary(group)
                self.console.print(
                    f"[bold]{escape(group_title(group))}[/bold] "
                    f"({len(suite.tests)} tests: {format_summary(summary)})"
                )
                for result in group_results:
                    self._print_result(result)

        overall = results.summary()
        style = "red" if overall.failed else "green"
        self.console.print(f"[{style}]{format_summary(overall)}[/{style}]")

    def _print_result(self, result: TestResult) -> None:
        label = self._label(result)
        self.console.print(f"  {_MARKERS[result.status]} {escape(label)}")

        outcome = result.outcome
        if not isinstance(outcome, Failed):
            return

        self.console.print(f"      expected: {escape(repr(outcome.expected))}")
        self.console.print(f"      actual:   {escape(repr(outcome.actual))}")
        name = comparator_name(result)
        if name is not None:
            self.console.print(f"      comparator: {escape(name)}")
            if self.verbosity > 0 and result.extra_args is not None:
                self.console.print(f"      extra args: {escape(repr(result.extra_args))}")

    def _label(self, result: TestResult) -> str:
        if self.prefix is None:
            return display_label(result.name)
        return display_label(result.name, self.prefix)


__all__ = ["ConsoleReporter", "comparator_name", "format_summary", "group_title"]
