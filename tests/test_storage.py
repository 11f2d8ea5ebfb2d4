"""
Unit tests for the persisted register representation.

Tests cover:
- Minimum storage width per flag count
- Byte encoding and decoding of registers
"""

import pytest

from BitFlags.constants import DefaultFlags
from BitFlags.exceptions import InvalidConfiguration, InvalidFlag
from BitFlags.storage import from_bytes, storage_width, to_bytes

from tests.conftest import CUSTOM_FLAG_NAMES


class TestStorageWidth:
    """Tests for storage_width."""

    @pytest.mark.parametrize("flag_count,expected", [
        (0, 1), (1, 1), (8, 1),
        (9, 2), (16, 2),
        (17, 3), (24, 3),
        (25, 4), (32, 4),
    ])
    def test_width_boundaries(self, flag_count, expected):
        assert storage_width(flag_count) == expected

    def test_beyond_single_register(self):
        with pytest.raises(InvalidConfiguration):
            storage_width(33)

    def test_negative_count(self):
        with pytest.raises(InvalidConfiguration):
            storage_width(-1)


class TestByteCodec:
    """Tests for to_bytes / from_bytes."""

    def test_default_register_uses_two_bytes(self, default_manager):
        default_manager.set_flags(DefaultFlags.VERIFIED_EMAIL, DefaultFlags.PROFILE_COMPLETED)
        assert to_bytes(default_manager) == bytes([0x01, 0x40])

    def test_custom_register_uses_one_byte(self, custom_manager):
        custom_manager.set_flags(custom_manager.FLAGS["CUSTOM_FLAG_3"])
        assert to_bytes(custom_manager) == b"\x04"

    def test_restore_from_bytes(self):
        manager = from_bytes(b"\x05\x00")
        assert manager.flags == 5
        assert manager.get_active_flags() == ["VERIFIED_EMAIL", "INVITED"]

    def test_restore_custom_from_bytes(self):
        manager = from_bytes(b"\x03", CUSTOM_FLAG_NAMES)
        assert manager.get_active_flags() == ["CUSTOM_FLAG_1", "CUSTOM_FLAG_2"]

    def test_restore_with_iterator_of_names(self):
        """The register is built once, so one-shot name iterators work."""
        manager = from_bytes(b"\x05", iter(CUSTOM_FLAG_NAMES))
        assert manager.get_active_flags() == ["CUSTOM_FLAG_1", "CUSTOM_FLAG_3"]

    def test_short_data_is_zero_extended(self):
        assert from_bytes(b"\x08").flags == 8
        assert from_bytes(b"").flags == 0

    def test_undefined_bits_rejected(self):
        with pytest.raises(InvalidFlag):
            from_bytes(b"\x08", CUSTOM_FLAG_NAMES)

    def test_too_wide_data_rejected(self):
        with pytest.raises(InvalidFlag):
            from_bytes(b"\x01\x00", CUSTOM_FLAG_NAMES)
