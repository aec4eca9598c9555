"""Reporting module for convtest output."""

from convtest.reports.base import Reporter
from convtest.reports.console import ConsoleReporter
from convtest.reports.registry import (
    canonical_name,
    register_builtin,
    reporter_class,
    resolve_reporter,
    resolve_reporters,
)


register_builtin(ConsoleReporter)

__all__ = [
    "ConsoleReporter",
    "Reporter",
    "canonical_name",
    "register_builtin",
    "reporter_class",
    "resolve_reporter",
    "resolve_reporters",
]
