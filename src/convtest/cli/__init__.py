"""CLI module for the convtest runner."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from convtest.config import DEFAULT_TEST_PREFIX, ConvtestConfig, load_config
from convtest.errors import ConfigError, TargetLoadError
from convtest.reports import Reporter, canonical_name, resolve_reporters
from convtest.reports.console import group_title
from convtest.testing import (
    ModuleNamespace,
    StaticNamespace,
    UnitRef,
    classify,
    discover,
    execute_next,
    start_execution,
    stop_execution,
)
from convtest.testing.namespace import Namespace, load_module
from convtest.types import GLOBAL_GROUP, Role


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_NO_TESTS = 5

logger = logging.getLogger(__name__)


def main() -> None:
    """Entry point for the convtest CLI."""
    console = Console()
    try:
        config = load_config()
    except ConfigError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(EXIT_USAGE) from exc

    parser = _build_parser()
    args = parser.parse_args(_apply_addopts(sys.argv[1:], config.addopts))

    if args.command == "run":
        raise SystemExit(_run(args, config, console))

    parser.print_help()
    raise SystemExit(EXIT_OK)


def _apply_addopts(argv: list[str], addopts: list[str]) -> list[str]:
    """Insert configured options right after the subcommand they belong to."""
    if not addopts or not argv or argv[0] != "run":
        return argv
    return [argv[0], *addopts, *argv[1:]]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="convtest", description="Convention-driven unit test runner"
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Discover and run tests")
    run_parser.add_argument(
        "targets", nargs="*", help="Dotted module paths or .py files (one run each)"
    )
    run_parser.add_argument("-k", "--keyword", help="Only run tests matching this expression")
    run_parser.add_argument("-p", "--prefix", help="Test-name prefix (default: ut)")
    run_parser.add_argument(
        "-r",
        "--reporter",
        dest="reporters",
        action="append",
        help="Reporter name or module:Class import string (repeatable)",
    )
    run_parser.add_argument(
        "--collect-only",
        action="store_true",
        help="Show discovered groups, hooks, and tests without running them",
    )
    run_parser.add_argument("-q", "--quiet", action="count", default=0, help="Reduce CLI output")
    run_parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase CLI output"
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _resolve_config(args: argparse.Namespace, config: ConvtestConfig) -> ConvtestConfig:
    if not args.prefix:
        return config
    try:
        return ConvtestConfig.model_validate({**config.model_dump(), "test_prefix": args.prefix})
    except ValidationError as exc:
        raise ConfigError(f"Invalid --prefix: {exc}") from exc


def _resolve_targets(args: argparse.Namespace, config: ConvtestConfig) -> list[str]:
    if args.targets:
        return args.targets
    return config.targets


def _resolve_keyword(args: argparse.Namespace, config: ConvtestConfig) -> str | None:
    return args.keyword or config.keyword


def _resolve_verbosity(args: argparse.Namespace, config: ConvtestConfig) -> int:
    return config.verbosity + args.verbose - args.quiet


def _resolve_reporters(
    args: argparse.Namespace,
    config: ConvtestConfig,
    *,
    verbosity: int,
    console: Console | None = None,
) -> list[Reporter]:
    """CLI reporters override config reporters; the console reporter is the default."""
    names = args.reporters or config.reporters or ["console"]
    options: dict[str, dict[str, Any]] = {}
    for name, opts in config.reporter_options.items():
        options.setdefault(canonical_name(name), {}).update(opts)
    console_options = options.setdefault(canonical_name("console"), {})
    console_options.setdefault("verbosity", verbosity)
    console_options.setdefault("prefix", config.test_prefix)
    if console is not None:
        console_options.setdefault("console", console)
    return resolve_reporters(names, options)


def _filter_units(units: Sequence[UnitRef], prefix: str, keyword: str | None) -> list[UnitRef]:
    """Drop tests whose name does not match ``keyword``; hooks and other units are kept."""
    if not keyword:
        return list(units)
    matcher = KeywordMatcher(keyword, prefix)
    return [
        unit
        for unit in units
        if classify(unit.name, prefix).role is not Role.TEST_CASE or matcher.match(unit.name)
    ]


def _namespace_for(target: str, prefix: str, keyword: str | None) -> Namespace:
    namespace = ModuleNamespace(load_module(target))
    if keyword is None:
        return namespace
    return StaticNamespace(_filter_units(namespace.enumerate(), prefix, keyword))


def _print_collection(console: Console, namespace: Namespace, prefix: str) -> int:
    metadata = discover(namespace, prefix)
    for suite in metadata.iter_suites():
        console.print(f"[bold]{escape(group_title(suite.group))}[/bold]")
        for role in (Role.BEFORE_ALL, Role.BEFORE_EACH, Role.AFTER_EACH, Role.AFTER_ALL):
            hook = suite.get_hook(role)
            if hook is not None:
                console.print(f"  [dim]{role.value}[/dim] {escape(hook.name)}")
        for test in suite.tests:
            console.print(f"  {escape(test.name)}")
    return metadata.test_count


def _run(args: argparse.Namespace, config: ConvtestConfig, console: Console) -> int:
    verbosity = _resolve_verbosity(args, config)
    _configure_logging(verbosity)

    try:
        config = _resolve_config(args, config)
        keyword = _resolve_keyword(args, config)
        if keyword:
            KeywordMatcher(keyword, config.test_prefix)
        reporters = _resolve_reporters(args, config, verbosity=verbosity, console=console)
    except (ConfigError, ValueError, TypeError, ImportError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return EXIT_USAGE

    targets = _resolve_targets(args, config)
    if not targets:
        console.print("[red]No targets given and no \\[tool.convtest] targets configured.[/red]")
        return EXIT_USAGE

    total_tests = 0
    total_failed = 0
    for target in targets:
        try:
            namespace = _namespace_for(target, config.test_prefix, keyword)
        except TargetLoadError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            return EXIT_USAGE

        if len(targets) > 1:
            console.rule(escape(target))

        if args.collect_only:
            total_tests += _print_collection(console, namespace, config.test_prefix)
            continue

        ctx = start_execution(namespace, prefix=config.test_prefix)
        try:
            steps = 0
            while execute_next(ctx):
                steps += 1
            metadata, results = ctx.metadata, ctx.results
            if metadata is None or results is None:
                console.print(f"[red]Run of {escape(target)} ended without results[/red]")
                return EXIT_USAGE

            summary = results.summary()
            total_tests += summary.total
            total_failed += summary.failed
            logger.info(
                "%s: %d tests, %d failed in %d steps", target, summary.total, summary.failed, steps
            )

            for rep in reporters:
                if summary.total == 0:
                    rep.on_no_tests_found()
                else:
                    rep.on_run_complete(metadata, results)
        finally:
            stop_execution(ctx)

    if total_tests == 0:
        return EXIT_NO_TESTS
    return EXIT_FAILED if total_failed else EXIT_OK


_KEYWORD_TOKEN = re.compile(r"[()]|[^\s()]+")
_PRECEDENCE = {"or": 1, "and": 2, "not": 3}
_GROUP_TERM = "group:"

Instruction = tuple[str, str | None]


class KeywordMatcher:
    """Select test names with a ``-k`` expression.

    A bare word matches when it occurs anywhere in the test name.
    ``group:NAME`` matches the tests of exactly that group, and ``group:.``
    the ungrouped ones. Terms combine with ``not``, ``and`` and ``or``
    (binding in that order) and parentheses.

    >>> KeywordMatcher("group:db and not slow").match("ut_db__slow_query")
    False
    """

    def __init__(self, expression: str, prefix: str = DEFAULT_TEST_PREFIX) -> None:
        self.expression = expression
        self.prefix = prefix
        self.program = self._compile(_KEYWORD_TOKEN.findall(expression))

    def match(self, name: str) -> bool:
        group = classify(name, self.prefix).group
        stack: list[bool] = []
        for op, operand in self.program:
            if op == "word":
                stack.append(operand in name)
            elif op == "group":
                stack.append(group is GLOBAL_GROUP if operand == "." else group == operand)
            elif op == "not":
                stack.append(not stack.pop())
            else:
                right, left = stack.pop(), stack.pop()
                stack.append(left and right if op == "and" else left or right)
        return stack.pop()

    def _compile(self, tokens: list[str]) -> list[Instruction]:
        """Translate infix tokens into postfix instructions."""
        program: list[Instruction] = []
        pending: list[str] = []
        want_term = True

        for token in tokens:
            word = token.lower()
            if want_term:
                if word in ("(", "not"):
                    pending.append(word)
                    continue
                if word in (")", "and", "or"):
                    raise self._invalid(f"expected a term before {token!r}")
                program.append(self._term(token))
                want_term = False
            elif word == ")":
                while pending and pending[-1] != "(":
                    program.append((pending.pop(), None))
                if not pending:
                    raise self._invalid("unmatched ')'")
                pending.pop()
            elif word in ("and", "or"):
                while (
                    pending
                    and pending[-1] != "("
                    and _PRECEDENCE[pending[-1]] >= _PRECEDENCE[word]
                ):
                    program.append((pending.pop(), None))
                pending.append(word)
                want_term = True
            else:
                raise self._invalid(f"expected 'and', 'or' or ')' before {token!r}")

        if want_term:
            raise self._invalid("expression ends without a term")
        while pending:
            op = pending.pop()
            if op == "(":
                raise self._invalid("unmatched '('")
            program.append((op, None))
        return program

    @staticmethod
    def _term(token: str) -> Instruction:
        if token.lower().startswith(_GROUP_TERM):
            return ("group", token[len(_GROUP_TERM):])
        return ("word", token)

    def _invalid(self, detail: str) -> ValueError:
        return ValueError(f"Invalid keyword expression {self.expression!r}: {detail}")


__all__ = ["KeywordMatcher", "main"]
