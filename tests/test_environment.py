"""Tests for loadenv.environment."""

import os

import pytest

from loadenv.environment import EnvironmentStore
from loadenv.exceptions import ApplyError


class RejectingEnviron(dict):
    """Rejects one key the way os.environ rejects NUL bytes."""

    def __init__(self, bad_key: str) -> None:
        super().__init__()
        self.bad_key = bad_key

    def __setitem__(self, key, value):
        if key == self.bad_key:
            raise ValueError("embedded null byte")
        super().__setitem__(key, value)


def test_apply_writes_and_overwrites():
    environ = {"A": "old"}
    store = EnvironmentStore(environ)

    written = store.apply({"A": "new", "B": "2"})

    assert written == 2
    assert environ == {"A": "new", "B": "2"}
    assert store.get("A") == "new"
    assert "B" in store


def test_apply_never_deletes():
    environ = {"KEEP": "1"}
    store = EnvironmentStore(environ)
    store.apply({})
    assert environ == {"KEEP": "1"}


def test_snapshot_is_a_copy():
    environ = {"A": "1"}
    store = EnvironmentStore(environ)
    snap = store.snapshot()
    environ["A"] = "2"
    assert snap == {"A": "1"}


def test_get_default():
    assert EnvironmentStore({}).get("MISSING", "dflt") == "dflt"


def test_apply_error_reports_key():
    environ = RejectingEnviron("BAD")
    store = EnvironmentStore(environ)

    with pytest.raises(ApplyError) as exc_info:
        store.apply({"GOOD": "1", "BAD": "x", "LATER": "2"})

    assert exc_info.value.code == "APPLY_FAILED"
    assert exc_info.value.details["key"] == "BAD"
    assert exc_info.value.details["applied"] == 1
    # No rollback of pairs written before the failure
    assert environ == {"GOOD": "1"}


def test_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LOADENV_TEST_ENVSTORE", "before")
    store = EnvironmentStore()
    store.apply({"LOADENV_TEST_ENVSTORE": "after"})
    assert os.environ["LOADENV_TEST_ENVSTORE"] == "after"
