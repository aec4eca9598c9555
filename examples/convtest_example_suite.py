"""Demonstrates convtest naming conventions.

Run with:

    convtest run examples/convtest_example_suite.py -v
"""

import math

from convtest import expect


inventory: dict[str, int] = {}


def before_all():
    """Global setup. Returning a falsy value would skip every test."""
    inventory.clear()
    return True


def before_each():
    inventory.setdefault("apples", 3)
    return True


def ut_addition():
    return expect(4, 2 + 2)


def ut_string_is_not_int():
    # Fails: default equality also requires matching types.
    return expect(5, "5")


def ut_float_tolerance():
    return expect(0.3, 0.1 + 0.2, math.isclose)


def before_all_stock():
    inventory["pears"] = 9
    return True


def after_each_stock(result):
    print(f"stock test {result.name}: {result.status.value}")


def ut_stock__apples():
    return expect(3, inventory["apples"])


def ut_stock__pears_within_tolerance():
    within = lambda expected, actual, tolerance: abs(expected - actual) <= tolerance
    return expect(10, inventory["pears"], within, 1)


def before_all_network():
    # Offline: every test in the "network" group is skipped.
    return False


def ut_network__fetch():
    raise RuntimeError("never runs")


def after_all_network(results):
    print(f"network suite finished with {len(results)} skipped tests")
