"""Unit tests for the fault-injection directives."""

from unittest.mock import patch

import pytest

from todo_service.handlers.utils.errors import InjectedFaultError
from todo_service.logic import directives


class TestExceptionDirective:

    def test_raises_with_message(self):
        with pytest.raises(InjectedFaultError) as exc_info:
            directives.raise_if_exception_requested("!exception database on fire")

        assert exc_info.value.message == "database on fire"
        assert exc_info.value.error_code == "INJECTED_FAULT"

    def test_plain_item_passes(self):
        directives.raise_if_exception_requested("Buy milk")


class TestErrorDirective:

    @pytest.mark.parametrize("item,expected", [
        ("!error 503", 503),
        ("please !error 404 now", 404),
        ("!error 400", 400),
        ("!error 399", None),
        ("!error 200", None),
        ("!error 12", None),
        ("Buy milk", None),
    ])
    def test_requested_error_status(self, item, expected):
        assert directives.requested_error_status(item) == expected


class TestSlowDirective:

    def test_requested_delay(self):
        assert directives.requested_delay_ms("!slow 250") == 250
        assert directives.requested_delay_ms("!slow fast") is None

    @patch("todo_service.logic.directives.time.sleep")
    def test_delay_sleeps(self, mock_sleep):
        applied = directives.delay(250, max_delay_ms=10000)

        assert applied == 250
        mock_sleep.assert_called_once_with(0.25)

    @patch("todo_service.logic.directives.time.sleep")
    def test_delay_is_capped(self, mock_sleep):
        applied = directives.delay(120000, max_delay_ms=2000)

        assert applied == 2000
        mock_sleep.assert_called_once_with(2.0)

    @patch("todo_service.logic.directives.time.sleep")
    def test_negative_delay_is_clamped(self, mock_sleep):
        assert directives.delay(-5, max_delay_ms=2000) == 0
        mock_sleep.assert_called_once_with(0.0)
