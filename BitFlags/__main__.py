#!/usr/bin/env python3
"""
Flag register demo

Builds a register, optionally restores a stored value and sets or clears
flags by name, then prints the status of every flag.

Usage:
    python -m BitFlags [--names A B C] [--value N] [--set NAME ...] [--unset NAME ...] [--yaml]

Example:
    python -m BitFlags --set "verified email" invited
    python -m BitFlags --names CAN_READ CAN_WRITE --value 0x3 --yaml
"""

import argparse
import sys

from .basic_types import normalize_flag_name
from .config import Config
from .constants import DefaultFlags
from .exceptions import InvalidConfiguration, InvalidFlag
from .flags_manager import FlagsManager
from .master_config_context import MasterConfigContext
from .status import flags_status_yaml, format_flags_status
from .storage import to_bytes


def resolve_flag(manager: FlagsManager, flag_name: str) -> int:
    if flag_name in manager.FLAGS:
        return manager.FLAGS[flag_name]
    normalized = normalize_flag_name(flag_name)
    if normalized in manager.FLAGS:
        return manager.FLAGS[normalized]
    raise InvalidConfiguration(f"Unknown flag name: {flag_name}")


def build_manager(args) -> FlagsManager:
    manager = FlagsManager.from_value(args.value, args.names)
    manager.set_flags(*(resolve_flag(manager, name) for name in args.set))
    for name in args.unset:
        manager.unset_flag(resolve_flag(manager, name))
    return manager


def render(manager: FlagsManager, as_yaml: bool) -> str:
    if as_yaml:
        return flags_status_yaml(manager).rstrip("\n")
    lines = [format_flags_status(manager), ""]
    if dict(manager.FLAGS) == DefaultFlags.definitions():
        lines.append(f"Active: {DefaultFlags(manager.flags).to_comma_separated() or '(none)'}")
    lines.append(f"Register: {manager.flags} (stored as 0x{to_bytes(manager).hex()})")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="python -m BitFlags",
        description="Show the status of a packed flag register",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --set "verified email" invited
  %(prog)s --names CAN_READ CAN_WRITE --value 0x3 --yaml
        """
    )
    parser.add_argument("--names", nargs="+", metavar="NAME",
                        help="Custom flag names, assigned bits 0, 1, 2, ... in order")
    parser.add_argument("--value", type=lambda v: int(v, 0), default=0,
                        help="Stored register value to start from (decimal or 0x hex)")
    parser.add_argument("--set", nargs="+", default=[], metavar="NAME", help="Flags to set")
    parser.add_argument("--unset", nargs="+", default=[], metavar="NAME", help="Flags to clear")
    parser.add_argument("--config", help="YAML config file to load")
    parser.add_argument("--yaml", action="store_true", help="Print the status as YAML")

    args = parser.parse_args(argv)

    try:
        if args.config:
            config = Config().load_from_yaml(args.config).validate().apply_logging()
        else:
            config = FlagsManager.config
        with MasterConfigContext({FlagsManager: config}):
            manager = build_manager(args)
    except (InvalidFlag, InvalidConfiguration) as e:
        parser.error(e.message)

    print(render(manager, args.yaml))
    return 0


if __name__ == "__main__":
    sys.exit(main())
