from .constants import DefaultFlags
from .exceptions import InvalidConfiguration, InvalidFlag
from .flags_manager import FlagsManager, create_custom_flags

__all__ = [
    "DefaultFlags",
    "FlagsManager",
    "InvalidConfiguration",
    "InvalidFlag",
    "create_custom_flags",
]
