"""Shared types for the convtest engine."""

from enum import Enum


class Role(Enum):
    """Lifecycle role of a unit, derived from its name."""

    BEFORE_ALL = "before_all"
    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"
    AFTER_ALL = "after_all"
    TEST_CASE = "test_case"
    NONE = "none"  # Not a test artifact


HOOK_ROLES = (Role.BEFORE_ALL, Role.BEFORE_EACH, Role.AFTER_EACH, Role.AFTER_ALL)


class _GlobalGroup(Enum):
    GROUP = "."

    def __repr__(self) -> str:
        return "GLOBAL_GROUP"

    def __str__(self) -> str:
        return self.value


# Holds ungrouped tests and the global hooks. Never equal to any string.
GLOBAL_GROUP = _GlobalGroup.GROUP

Group = str | _GlobalGroup
