"""convtest - convention-driven unit test discovery and resumable execution."""

from .errors import ContractViolation, ConvtestError, MalformedTestReturn
from .testing import (
    ExecutionContext,
    ModuleNamespace,
    Registry,
    ResultsModel,
    StaticNamespace,
    TestStatus,
    execute_next,
    expect,
    run_all,
    start_execution,
    stop_execution,
)
from .types import GLOBAL_GROUP, Role
from .version import __version__


__all__ = [
    # Entry points
    "start_execution",
    "execute_next",
    "stop_execution",
    "run_all",
    "ExecutionContext",
    # Declaring tests
    "expect",
    "Registry",
    "ModuleNamespace",
    "StaticNamespace",
    # Results
    "ResultsModel",
    "TestStatus",
    "GLOBAL_GROUP",
    "Role",
    # Errors
    "ConvtestError",
    "ContractViolation",
    "MalformedTestReturn",
]
