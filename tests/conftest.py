"""
Shared pytest fixtures for BitFlags tests.

Provides registers built from the default flag enumeration and from a
custom name list, plus helpers for log capture and temporary config files.
"""

import os
import sys

import pytest

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from BitFlags.flags_manager import FlagsManager
from BitFlags.structured_logger import clear_stored_messages, start_message_capture, stop_message_capture


CUSTOM_FLAG_NAMES = ["CUSTOM_FLAG_1", "CUSTOM_FLAG_2", "CUSTOM_FLAG_3"]


@pytest.fixture
def default_manager():
    """A register using the built-in default flags, with nothing set."""
    return FlagsManager()


@pytest.fixture
def custom_manager():
    """A register using CUSTOM_FLAG_NAMES, with nothing set."""
    return FlagsManager(CUSTOM_FLAG_NAMES)


@pytest.fixture
def captured_logs():
    """Capture structured log messages for the duration of a test."""
    start_message_capture()
    yield
    stop_message_capture()
    clear_stored_messages()


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(text: str, name: str = "bitflags.yaml") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
