"""Drives a run one step at a time, doing other work between steps."""

import logging

from convtest import Registry, execute_next, expect, start_execution, stop_execution
from convtest.reports import ConsoleReporter


logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

registry = Registry()


@registry.unit
def ut_square():
    return expect(16, 4 * 4)


@registry.unit(name="ut_text__title")
def title_case():
    return expect("Hello World", "hello world".title())


def main() -> None:
    ctx = start_execution(registry)
    step = 0
    try:
        while execute_next(ctx):
            step += 1
            print(f"-- step {step}: phase={ctx.phase.value}")
        ConsoleReporter().on_run_complete(ctx.metadata, ctx.results)
    finally:
        stop_execution(ctx)


if __name__ == "__main__":
    main()
