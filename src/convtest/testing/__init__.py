"""Discovery and execution of convention-named test units.

Units are classified by name (``before_all``, ``after_each_<group>``,
``ut_<name>``, ``ut_<group>__<name>``...), folded into a MetadataModel, and
executed one step at a time through an ExecutionContext.
"""

from .classify import Classification, classify, display_label
from .discovery import discover
from .execution import execute
from .expect import Expectation, expect
from .metadata import MetadataModel, SuiteMetadata
from .namespace import ModuleNamespace, Namespace, Registry, StaticNamespace, UnitRef
from .results import Failed, Passed, ResultsModel, Skipped, Summary, TestResult, TestStatus
from .runner import ExecutionContext, Phase, execute_next, run_all, start_execution, stop_execution


__all__ = [
    "Classification",
    "ExecutionContext",
    "Expectation",
    "Failed",
    "MetadataModel",
    "ModuleNamespace",
    "Namespace",
    "Passed",
    "Phase",
    "Registry",
    "ResultsModel",
    "Skipped",
    "StaticNamespace",
    "SuiteMetadata",
    "Summary",
    "TestResult",
    "TestStatus",
    "UnitRef",
    "classify",
    "discover",
    "display_label",
    "execute",
    "execute_next",
    "expect",
    "run_all",
    "start_execution",
    "stop_execution",
]
