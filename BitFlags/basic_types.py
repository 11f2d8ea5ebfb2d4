from enum import IntFlag
from typing import Dict, Iterable, List

from .exceptions import InvalidConfiguration


def normalize_flag_name(flag_name: str) -> str:
    # "verified email" -> "VERIFIED_EMAIL"
    return flag_name.strip().upper().replace(" ", "_")


def validate_flag_names(flag_names: Iterable[str], max_bits: int) -> List[str]:
    """
    Check a custom flag name list before bits are assigned to it.

    Raises InvalidConfiguration for a bare string instead of a list, a name
    that is not a non-empty string, a duplicated name, or more names than
    `max_bits`. Returns the names as a list so iterators are consumed once.
    """
    if isinstance(flag_names, (str, bytes)):
        raise InvalidConfiguration(f"Flag names must be a list of names, not {type(flag_names).__name__}")
    flag_names = list(flag_names)
    seen = set()
    for name in flag_names:
        if not isinstance(name, str) or not name:
            raise InvalidConfiguration(f"Invalid flag name: {name!r}")
        if name in seen:
            raise InvalidConfiguration(f"Duplicate flag name: {name}")
        seen.add(name)
    if len(seen) > max_bits:
        raise InvalidConfiguration(f"Too many flags: {len(seen)} names for a {max_bits}-bit register")
    return flag_names


class DescriptiveFlags(IntFlag):

    @classmethod
    def field_name(cls, index: int) -> str:
        try:
            return cls.field_name_unsafe(index)
        except IndexError:
            return "unknown_flag"

    @classmethod
    def field_name_unsafe(cls, index: int) -> str:
        # Default description is the member name in lower case with spaces
        names = list(cls.__members__)
        return names[index].lower().replace("_", " ")

    @classmethod
    def definitions(cls) -> Dict[str, int]:
        """Ordered name -> bit value mapping, in declaration order."""
        return {name: int(member) for name, member in cls.__members__.items()}

    @classmethod
    def from_field_name(cls, flag_name: str) -> 'DescriptiveFlags':
        name = normalize_flag_name(flag_name)
        if name in cls.__members__:
            return cls.__members__[name]
        raise ValueError(f"Invalid flag name: {flag_name}")

    def to_comma_separated(self) -> str:
        return ', '.join(self.field_name(flag.value.bit_length() - 1) for flag in self.get_flags_set())

    def get_flags_set(self) -> List['DescriptiveFlags']:
        return [flag for flag in self.__class__ if self & flag == flag]
