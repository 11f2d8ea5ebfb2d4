"""
Helpers for persisting a register outside the process, e.g. in a database
column sized to the number of defined flags.
"""
from typing import Optional, Sequence

from .constants import Constants
from .exceptions import InvalidConfiguration, InvalidFlag
from .flags_manager import FlagsManager
from .structured_logger import StructuredLogger

BYTE_ORDER = "little"


def storage_width(flag_count: int) -> int:
    """Minimum number of bytes needed to store a register of `flag_count` flags."""
    if flag_count < 0:
        raise InvalidConfiguration(f"Flag count cannot be negative: {flag_count}")
    for max_flags, width in Constants.STORAGE_WIDTHS:
        if flag_count <= max_flags:
            return width
    raise InvalidConfiguration(
        f"{flag_count} flags do not fit in a single register of {Constants.MAX_SUPPORTED_BITS} bits")


def to_bytes(manager: FlagsManager) -> bytes:
    return manager.flags.to_bytes(storage_width(len(manager.FLAGS)), BYTE_ORDER)


def from_bytes(data: bytes, custom_flag_names: Optional[Sequence[str]] = None) -> FlagsManager:
    logger = StructuredLogger(__name__, prefix="from_bytes()> ")
    value = int.from_bytes(data, BYTE_ORDER)
    manager = FlagsManager.from_value(value, custom_flag_names)
    width = storage_width(len(manager.FLAGS))
    if len(data) > width:
        logger.warning("stored register is wider than its flag set", width=width, length=len(data))
        raise InvalidFlag(value)
    return manager
