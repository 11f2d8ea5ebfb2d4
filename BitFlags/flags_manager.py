"""
The FlagsManager packs a fixed set of boolean attributes into one integer.

Instead of carrying separate booleans (verified_email, verified_phone,
invited, accepted, ...) a record keeps a single register whose bits are
set, cleared, toggled and queried through the flag values of its
definition set.
"""
import operator
from functools import reduce
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .basic_types import validate_flag_names
from .config import default_app_config
from .constants import Constants, DefaultFlags
from .exceptions import InvalidConfiguration, InvalidFlag
from .structured_logger import StructuredLogger


def create_custom_flags(flag_names: Iterable[str], max_bits: Optional[int] = None) -> Dict[str, int]:
    """
    Map the Nth name of `flag_names` to the bit value 1 << N.

    >>> create_custom_flags(["A", "B", "C"])
    {'A': 1, 'B': 2, 'C': 4}
    """
    if max_bits is None:
        max_bits = FlagsManager.config.MAX_FLAG_BITS
    if max_bits > Constants.MAX_SUPPORTED_BITS:
        raise InvalidConfiguration(
            f"max_bits {max_bits} exceeds the {Constants.MAX_SUPPORTED_BITS}-bit register limit")
    flag_names = validate_flag_names(flag_names, max_bits)
    return {name: 1 << index for index, name in enumerate(flag_names)}


class FlagsManager:
    config = default_app_config
    DEFAULT_FLAGS = DefaultFlags

    def __init__(self, custom_flag_names: Optional[Sequence[str]] = None):
        logger = StructuredLogger(__name__, prefix="FlagsManager.__init__()> ")
        self._flags = 0
        if custom_flag_names is None:
            custom_flag_names = self.config.DEFAULT_FLAG_NAMES
        if custom_flag_names is None:
            definitions = DefaultFlags.definitions()
            if len(definitions) > self.config.MAX_FLAG_BITS:
                raise InvalidConfiguration(
                    f"Too many flags: {len(definitions)} default flags for a "
                    f"{self.config.MAX_FLAG_BITS}-bit register")
        else:
            definitions = create_custom_flags(custom_flag_names, self.config.MAX_FLAG_BITS)
        self._definitions = MappingProxyType(definitions)
        self._valid_values = frozenset(definitions.values())
        self._defined_mask = reduce(operator.or_, definitions.values(), 0)
        logger.debug2("flag definitions built", flags=list(definitions))

    @classmethod
    def from_value(cls, value: int, custom_flag_names: Optional[Sequence[str]] = None) -> 'FlagsManager':
        """Build a register that already holds a previously stored `value`."""
        manager = cls(custom_flag_names)
        if (isinstance(value, bool) or not isinstance(value, int)
                or value < 0 or value & ~manager._defined_mask):
            raise InvalidFlag(value)
        manager._flags = int(value)
        return manager

    create_custom_flags = staticmethod(create_custom_flags)

    @property
    def flags(self) -> int:
        return self._flags

    @property
    def FLAGS(self) -> Mapping[str, int]:
        return self._definitions

    @property
    def defined_mask(self) -> int:
        """Every bit that belongs to a defined flag."""
        return self._defined_mask

    def set_flags(self, *flags: int) -> None:
        logger = StructuredLogger(__name__, prefix="FlagsManager.set_flags()> ")
        # Validate everything first so a bad value leaves the register untouched
        for flag in flags:
            self._validate_flag(flag)
        self._flags = reduce(lambda acc, flag: acc | int(flag), flags, self._flags)
        logger.debug3("flags set", requested=[int(flag) for flag in flags], register=self._flags)

    def is_flag_set(self, flag: int) -> bool:
        self._validate_flag(flag)
        return (self._flags & flag) != 0

    def toggle_flag(self, flag: int) -> None:
        logger = StructuredLogger(__name__, prefix="FlagsManager.toggle_flag()> ")
        self._validate_flag(flag)
        self._flags ^= int(flag)
        logger.debug3("flag toggled", flag=int(flag), register=self._flags)

    def unset_flag(self, flag: int) -> None:
        logger = StructuredLogger(__name__, prefix="FlagsManager.unset_flag()> ")
        self._validate_flag(flag)
        self._flags &= ~int(flag)
        logger.debug3("flag unset", flag=int(flag), register=self._flags)

    def get_active_flags(self) -> List[str]:
        return [name for name, value in self._definitions.items() if self._flags & value]

    def clear_flags(self) -> None:
        self._flags = 0

    def are_flags_set(self, *flags: int) -> bool:
        # Accepts any bitmask; membership in the definition set is not checked
        combined_flags = reduce(operator.or_, flags, 0)
        return (self._flags & combined_flags) == combined_flags

    def _validate_flag(self, flag) -> None:
        if isinstance(flag, bool) or not isinstance(flag, int) or flag not in self._valid_values:
            logger = StructuredLogger(__name__, prefix="FlagsManager._validate_flag()> ")
            logger.debug("rejected flag", flag=repr(flag))
            raise InvalidFlag(flag)

    def __repr__(self):
        return f"<{self.__class__.__name__} flags={self._flags} active={self.get_active_flags()}>"
