from typing import ClassVar, List, Tuple
from .basic_types import DescriptiveFlags


class DefaultFlags(DescriptiveFlags):
    VERIFIED_EMAIL = 1 << 0
    VERIFIED_PHONE = 1 << 1
    INVITED = 1 << 2
    ACCEPTED = 1 << 3
    RESET_PASSWORD = 1 << 4
    LOGGED_IN_FIRST_TIME = 1 << 5
    LOGGED_IN = 1 << 6
    ADMIN = 1 << 7
    MODERATOR = 1 << 8
    BANNED = 1 << 9
    PREMIUM_USER = 1 << 10
    TWO_FACTOR_AUTH = 1 << 11
    EMAIL_NOTIFICATIONS = 1 << 12
    SMS_NOTIFICATIONS = 1 << 13
    PROFILE_COMPLETED = 1 << 14


class Constants:
    # Hard ceiling for a single register; more flags need another structure
    MAX_SUPPORTED_BITS: ClassVar[int] = 32
    # (highest flag count, bytes needed to store the register)
    STORAGE_WIDTHS: ClassVar[List[Tuple[int, int]]] = [(8, 1), (16, 2), (24, 3), (32, 4)]
    STATUS_ACTIVE: ClassVar[str] = "Active"
    STATUS_INACTIVE: ClassVar[str] = "Inactive"
    STATUS_HEADERS: ClassVar[Tuple[str, str]] = ("Flag", "Status")
    CONFIG_FILE_ENV_VAR: ClassVar[str] = "BITFLAGS_CONFIG_FILE"

