"""Lookup of the reporters named by ``-r`` and ``reporters = [...]``.

Built-in reporters answer to a short name derived from their class
(``ConsoleReporter`` is ``console``), case-insensitively, and to their class
name. Anything else must be a ``module:Class`` import string naming a class
that implements :class:`~convtest.reports.base.Reporter`.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from convtest.reports.base import Reporter


R = TypeVar("R", bound=type)

_builtins: dict[str, type[Reporter]] = {}


def short_name(cls: type) -> str:
    name = cls.__name__
    return (name.removesuffix("Reporter") or name).lower()


def register_builtin(cls: R) -> R:
    """Make ``cls`` available under its short name."""
    _builtins[short_name(cls)] = cls
    return cls


def canonical_name(name: str) -> str:
    """Key under which a reporter's options are stored.

    Built-in spellings collapse to the short name; import strings are
    returned unchanged.
    """
    for key, cls in _builtins.items():
        if name.lower() == key or name == cls.__name__:
            return key
    return name


def reporter_class(name: str) -> type[Reporter]:
    """Find the reporter class for ``name``.

    Raises:
        ValueError: If ``name`` is neither built-in nor a ``module:Class`` string.
        TypeError: If the imported object does not implement Reporter.
        ImportError: If the module of an import string cannot be imported.
    """
    key = canonical_name(name)
    if key in _builtins:
        return _builtins[key]

    module_path, sep, class_name = name.partition(":")
    if not sep or not module_path or not class_name:
        available = ", ".join(sorted(_builtins))
        raise ValueError(
            f"Unknown reporter: {name}. Built-in reporters: {available}; "
            "others are given as module:Class"
        )

    cls = getattr(importlib.import_module(module_path), class_name, None)
    if cls is None:
        raise ValueError(f"Unknown reporter: {module_path} has no attribute {class_name!r}")
    if not isinstance(cls, type) or not issubclass(cls, Reporter):
        raise TypeError(f"{name} does not implement the Reporter protocol")
    return cls


def resolve_reporter(name: str, **kwargs: Any) -> Reporter:
    return reporter_class(name)(**kwargs)


def resolve_reporters(
    names: Sequence[str],
    options: Mapping[str, Mapping[str, Any]] | None = None,
) -> list[Reporter]:
    """Instantiate ``names`` in order.

    ``options`` maps a reporter name to its constructor kwargs; any spelling
    of a built-in name finds the same options.
    """
    merged: dict[str, dict[str, Any]] = {}
    for name, opts in (options or {}).items():
        merged.setdefault(canonical_name(name), {}).update(opts)
    return [resolve_reporter(name, **merged.get(canonical_name(name), {})) for name in names]


__all__ = [
    "canonical_name",
    "register_builtin",
    "reporter_class",
    "resolve_reporter",
    "resolve_reporters",
    "short_name",
]
