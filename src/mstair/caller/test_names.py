# File: src/mstair/caller/test_names.py
"""
Tests for package-name parsing and module-path conversion.
"""

from __future__ import annotations

import pytest

from mstair.caller.names import module_path, package_name


@pytest.mark.parametrize(
    ("full_func_name", "expected"),
    [
        ("group/sub.Type.Method", "group/sub"),
        ("runtime.Caller", "runtime"),
        ("Caller", ""),
        ("gdey/caller.Foo", "gdey/caller"),
        ("github.com/gdey/caller_test.TestCaller_Caller.func1.10", "github.com/gdey/caller_test"),
        ("mstair/caller/simple_log.MyCaller.double", "mstair/caller/simple_log"),
        ("pkg/mod.outer.<locals>.inner", "pkg/mod"),
        ("", ""),
    ],
)
def test_package_name(full_func_name: str, expected: str) -> None:
    assert package_name(full_func_name) == expected


def test_module_path_replaces_dots() -> None:
    assert module_path("mstair.caller.resolver") == "mstair/caller/resolver"
    assert module_path("conftest") == "conftest"


def test_module_path_round_trips_through_package_name() -> None:
    assert package_name(f"{module_path(__name__)}.test_x.<locals>.inner") == module_path(__name__)


# End of file: src/mstair/caller/test_names.py
