"""Tests for the environment-backed settings utility."""

import os

import pytest

from quickbench.utils.env import SettingTypeError, env_name, get_setting


def test_env_name():
    """Test the QUICKBENCH_ prefix is added once."""
    assert env_name("repeat") == "QUICKBENCH_REPEAT"
    assert env_name("QUICKBENCH_REPEAT") == "QUICKBENCH_REPEAT"


def test_get_setting_basic():
    """Test getting set settings and missing settings with defaults."""
    os.environ["QUICKBENCH_TEST_VAR"] = "test_value"
    assert get_setting("TEST_VAR") == "test_value"
    assert get_setting("QUICKBENCH_TEST_VAR") == "test_value"
    assert get_setting("MISSING_VAR", default="default") == "default"
    assert get_setting("MISSING_VAR") is None
    del os.environ["QUICKBENCH_TEST_VAR"]


def test_get_setting_empty_uses_default(monkeypatch):
    """Test an empty variable counts as unset."""
    monkeypatch.setenv("QUICKBENCH_REPEAT", "")

    assert get_setting("REPEAT", default=3, as_type=int) == 3


def test_get_setting_coercion():
    """Test coercion for the setting types quickbench reads."""
    os.environ["QUICKBENCH_BOOL_TRUE"] = "true"
    os.environ["QUICKBENCH_BOOL_FALSE"] = "off"
    os.environ["QUICKBENCH_INT"] = "123"
    os.environ["QUICKBENCH_STR"] = "DEBUG"

    assert get_setting("BOOL_TRUE", as_type=bool) is True
    assert get_setting("BOOL_FALSE", as_type=bool) is False
    assert get_setting("INT", as_type=int) == 123
    assert get_setting("STR", as_type=str) == "DEBUG"

    # Test coercion failure
    os.environ["QUICKBENCH_INVALID_INT"] = "not_an_int"
    with pytest.raises(SettingTypeError) as exc_info:
        get_setting("INVALID_INT", as_type=int)
    assert exc_info.value.name == "QUICKBENCH_INVALID_INT"

    # Cleanup
    for var in [
        "QUICKBENCH_BOOL_TRUE",
        "QUICKBENCH_BOOL_FALSE",
        "QUICKBENCH_INT",
        "QUICKBENCH_STR",
        "QUICKBENCH_INVALID_INT",
    ]:
        if var in os.environ:
            del os.environ[var]


def test_no_gc_setting(monkeypatch):
    """Test the NO_GC flag reads the usual false spellings."""
    for value, expected in [("1", True), ("yes", True), ("0", False), ("no", False)]:
        monkeypatch.setenv("QUICKBENCH_NO_GC", value)
        assert get_setting("NO_GC", default=False, as_type=bool) is expected
