"""Tests for the destructive-operation confirmation gate."""

import pytest

from kubectl_multi.shared.confirmation import confirm_destructive


def _reader(text):
    return lambda: text


@pytest.mark.parametrize("answer", ["yes\n", "YES\n", "Yes \n", " yes\n", "yes"])
def test_yes_confirms(answer):
    echoed = []
    assert confirm_destructive("Sure?", _reader(answer), echoed.append) is True
    assert echoed == ["Sure?"]


@pytest.mark.parametrize("answer", ["y\n", "\n", "", "no\n", "yes please\n", "ye s\n"])
def test_anything_else_declines(answer):
    assert confirm_destructive("Sure?", _reader(answer), lambda _: None) is False


@pytest.mark.parametrize("error", [OSError("closed"), EOFError(), UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad")])
def test_read_errors_decline(error):
    def _broken():
        raise error

    assert confirm_destructive("Sure?", _broken, lambda _: None) is False


def test_none_declines():
    assert confirm_destructive("Sure?", lambda: None, lambda _: None) is False
