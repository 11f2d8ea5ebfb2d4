"""
Unit tests for the structured logger.

Tests cover:
- Message capture
- Prefixes and prefix filtering
- Debug detail levels
- DetailedException origin information
"""

import logging

import pytest

from BitFlags.structured_logger import (
    PACKAGE_LOGGER_NAME, DetailedException, StructuredLogger, get_detail_level,
    get_stored_messages, set_detail_level,
)


@pytest.fixture
def debug_enabled():
    """Let debug messages through the package logger for one test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    previous_level = package_logger.level
    previous_detail = get_detail_level()
    package_logger.setLevel(logging.DEBUG)
    yield
    package_logger.setLevel(previous_level)
    set_detail_level(previous_detail)


class TestMessageCapture:
    """Tests for capturing log output."""

    def test_info_is_captured_with_prefix(self, captured_logs):
        logger = StructuredLogger("BitFlags.tests", prefix="capture()> ")
        logger.info("hello", register=5)
        messages = get_stored_messages()
        assert len(messages) == 1
        assert "capture()> hello" in messages[0]
        assert "register=5" in messages[0]

    def test_lists_are_rendered_as_yaml(self, captured_logs):
        StructuredLogger("BitFlags.tests").warning("active", flags=["A", "B"])
        assert "flags=[A, B]" in get_stored_messages()[0]

    def test_nothing_captured_when_inactive(self):
        StructuredLogger("BitFlags.tests").info("not stored")
        assert all("not stored" not in message for message in get_stored_messages())

    def test_debug_below_package_level_dropped(self, captured_logs):
        StructuredLogger("BitFlags.tests").debug("quiet")
        assert get_stored_messages() == []


class TestDetailLevels:
    """Tests for debug / debug2 / debug3 filtering."""

    def test_detail_level_filters_debug(self, debug_enabled, captured_logs):
        set_detail_level(2)
        logger = StructuredLogger("BitFlags.tests")
        logger.debug("one")
        logger.debug2("two")
        logger.debug3("three")
        messages = " ".join(get_stored_messages())
        assert "one" in messages
        assert "two" in messages
        assert "three" not in messages

    def test_register_operations_log_at_debug3(self, debug_enabled, captured_logs, default_manager):
        set_detail_level(3)
        default_manager.set_flags(1)
        assert any("FlagsManager.set_flags()> flags set" in message for message in get_stored_messages())


class TestPrefixFilter:
    """Tests for restricting output to given prefixes."""

    def test_only_allowed_prefixes_pass(self, captured_logs):
        first = StructuredLogger("BitFlags.tests", prefix="first> ")
        second = StructuredLogger("BitFlags.tests", prefix="second> ")
        first.set_allowed_prefixes("first> ")
        try:
            assert first.get_allowed_prefixes() == ["first> "]
            first.info("kept")
            second.info("dropped")
        finally:
            first.set_allowed_prefixes("")
        messages = get_stored_messages()
        assert len(messages) == 1
        assert "first> kept" in messages[0]
        assert first.get_allowed_prefixes() is None


class TestDetailedException:
    """Tests for exceptions carrying their origin."""

    def test_records_raising_function(self):
        def raising_function():
            raise DetailedException("boom")

        with pytest.raises(DetailedException) as exc_info:
            raising_function()
        assert exc_info.value.func_name == "raising_function"
        assert exc_info.value.module == "test_structured_logger"
        assert str(exc_info.value).endswith(">>\nboom")

    def test_raise_from_here(self):
        def raising_function():
            DetailedException.raise_from_here("from here")

        with pytest.raises(DetailedException) as exc_info:
            raising_function()
        assert exc_info.value.func_name == "raising_function"
        assert exc_info.value.message == "from here"
