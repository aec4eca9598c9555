"""Base reporter protocol for convtest output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from convtest.testing.metadata import MetadataModel
    from convtest.testing.results import ResultsModel


@runtime_checkable
class Reporter(Protocol):
    """Protocol defining the interface for run reporters.

    Reporters only read the models they are given, in the order the engine
    produced them.
    """

    def on_no_tests_found(self) -> None:
        """Called when discovery finds no tests."""
        ...

    def on_run_complete(self, metadata: MetadataModel, results: ResultsModel) -> None:
        """Called once after the last step of a run."""
        ...
