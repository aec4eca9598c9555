from pathlib import Path

import pytest

from convtest.errors import TargetLoadError
from convtest.testing import ModuleNamespace, Registry, StaticNamespace, UnitRef
from convtest.testing.namespace import load_module


SAMPLES = Path(__file__).parent / "samples"


def test_module_namespace_lists_local_functions_in_declaration_order():
    module = load_module(str(SAMPLES / "sample_suite.py"))
    names = [unit.name for unit in ModuleNamespace(module).enumerate()]

    assert names == [
        "before_all",
        "ut_addition",
        "ut_strings__concat",
        "before_all_strings",
        "ut_strings__upper",
        "helper",
    ]
    assert "expect" not in names


def test_module_namespace_enumeration_is_stable():
    namespace = ModuleNamespace(load_module(str(SAMPLES / "sample_suite.py")))
    assert namespace.enumerate() == namespace.enumerate()


def test_load_module_by_dotted_path():
    module = load_module("convtest.testing.classify")
    assert hasattr(module, "classify")


def test_load_module_missing_file():
    with pytest.raises(TargetLoadError, match="missing.py"):
        load_module(str(SAMPLES / "missing.py"))


def test_load_module_missing_module():
    with pytest.raises(TargetLoadError) as exc_info:
        load_module("convtest_no_such_module")
    assert isinstance(exc_info.value.cause, ImportError)


def test_load_module_broken_file(tmp_path):
    broken = tmp_path / "broken.py"
    broken.write_text("raise RuntimeError('import time failure')\n", encoding="utf-8")
    with pytest.raises(TargetLoadError, match="import time failure"):
        load_module(str(broken))


def test_registry_decorator_forms():
    registry = Registry()

    @registry.unit
    def ut_first():
        return None

    @registry.unit(name="before_all_db")
    def connect():
        return True

    assert [unit.name for unit in registry.enumerate()] == ["ut_first", "before_all_db"]
    assert registry.enumerate()[1].fn is connect
    assert len(registry) == 2


def test_static_namespace_accepts_pairs_and_refs():
    def fn():
        return 1

    namespace = StaticNamespace([("ut_a", fn), UnitRef("ut_b", fn)])
    assert [unit.name for unit in namespace.enumerate()] == ["ut_a", "ut_b"]
    assert namespace.enumerate()[0].invoke() == 1


def test_unit_ref_invoke_passes_arguments():
    ref = UnitRef("after_each", lambda result: result * 2)
    assert ref.invoke(21) == 42
