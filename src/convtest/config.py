"""Project configuration loaded from ``[tool.convtest]`` in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from convtest.errors import ConfigError


logger = logging.getLogger(__name__)

DEFAULT_TEST_PREFIX = "ut"
GROUP_SEPARATOR = "__"


def check_test_prefix(value: str) -> str:
    """Return ``value`` if it can serve as a test-name prefix, else raise ValueError."""
    if not isinstance(value, str) or not value.isidentifier():
        raise ValueError(f"test_prefix must be a non-empty identifier, got {value!r}")
    if GROUP_SEPARATOR in value:
        raise ValueError(f"test_prefix must not contain {GROUP_SEPARATOR!r}")
    return value


class ConvtestConfig(BaseModel):
    """Settings shared by the CLI and ``run_all``.

    Attributes
    ----------
    test_prefix:
        Name prefix marking a unit as a test case (``<prefix>_<name>``).
    targets:
        Modules or ``.py`` files run when the CLI gets no positional targets.
    keyword:
        Default ``-k`` expression.
    verbosity:
        Baseline console verbosity; CLI ``-v``/``-q`` adjust it.
    addopts:
        Extra CLI arguments prepended to the command line.
    reporters:
        Reporter names or import strings.
    reporter_options:
        Constructor kwargs per reporter name.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    test_prefix: str = DEFAULT_TEST_PREFIX
    targets: list[str] = Field(default_factory=list)
    keyword: str | None = None
    verbosity: int = 0
    addopts: list[str] = Field(default_factory=list)
    reporters: list[str] = Field(default_factory=list)
    reporter_options: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("test_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        return check_test_prefix(value)


DEFAULT_CONFIG = ConvtestConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> ConvtestConfig:
    """Load ``[tool.convtest]`` from the nearest pyproject.toml.

    Falls back to :data:`DEFAULT_CONFIG` when there is no pyproject.toml or
    it has no ``[tool.convtest]`` table.
    """
    path = find_pyproject(start)
    if path is None:
        return DEFAULT_CONFIG

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc

    section = data.get("tool", {}).get("convtest")
    if section is None:
        return DEFAULT_CONFIG

    logger.debug("Loaded [tool.convtest] from %s", path)
    try:
        return ConvtestConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.convtest] in {path}:\n{exc}") from exc


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_TEST_PREFIX",
    "GROUP_SEPARATOR",
    "ConvtestConfig",
    "check_test_prefix",
    "find_pyproject",
    "load_config",
]
