"""
Unit tests for options normalization and error-slot classification.
"""
from __future__ import annotations

import pytest

from cblogger.core.models import AbsentError, StringError, StructuredError, classify_error
from cblogger.core.schema import LogOptions, normalize_options


@pytest.mark.parametrize("raw", [None, "string", 42, ["ts", False]])
def test_non_mapping_options_are_defaults(raw: object) -> None:
    assert normalize_options(raw) == LogOptions()


def test_lax_boolean_strings() -> None:
    opts = normalize_options({"ts": "false", "stack": "true"})
    assert opts.ts is False
    assert opts.stack is True


def test_invalid_values_fall_back_to_defaults() -> None:
    opts = normalize_options({"depth": 0, "stack": True, "alert": "maybe"}, {"ts": True, "depth": 2})
    assert opts.depth == 2
    assert opts.stack is True
    assert opts.alert is False


def test_defaults_are_overridden_by_caller() -> None:
    opts = normalize_options({"ts": True}, {"ts": False, "depth": 9})
    assert opts.ts is True
    assert opts.depth == 9


def test_unknown_keys_are_passthrough() -> None:
    opts = normalize_options({"scope": "billing", "channel": "#ops"})
    assert opts.scope == "billing"
    assert opts.passthrough == {"channel": "#ops"}


def test_options_instance_is_kept() -> None:
    opts = LogOptions(stack=True)
    assert normalize_options(opts, {"stack": False}) is opts


@pytest.mark.parametrize(
    "err, expected",
    [
        (None, AbsentError()),
        ("", AbsentError()),
        ("Error!", StringError("Error!")),
        ({"code": 500}, StructuredError({"code": 500})),
    ],
)
def test_classify_error(err: object, expected: object) -> None:
    assert classify_error(err) == expected


def test_classify_exception_is_structured() -> None:
    err = KeyError("x")
    assert classify_error(err) == StructuredError(err)
