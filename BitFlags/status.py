"""Human readable dumps of a register's flags, for debugging and logs."""
from typing import Dict, List

from .constants import Constants
from .flags_manager import FlagsManager
from .structured_logger import StructuredLogger
from .yaml_dumper import YamlDumper


def flags_status(manager: FlagsManager) -> List[Dict[str, str]]:
    flag_header, status_header = Constants.STATUS_HEADERS
    return [
        {
            flag_header: name,
            status_header: Constants.STATUS_ACTIVE if manager.is_flag_set(value) else Constants.STATUS_INACTIVE,
        }
        for name, value in manager.FLAGS.items()
    ]


def format_flags_status(manager: FlagsManager) -> str:
    """
    Render the status rows as a fixed-width table:

        Flag            Status
        --------------  --------
        VERIFIED_EMAIL  Active
    """
    flag_header, status_header = Constants.STATUS_HEADERS
    rows = flags_status(manager)
    flag_width = max([len(flag_header)] + [len(row[flag_header]) for row in rows])
    status_width = max(len(status_header), len(Constants.STATUS_INACTIVE))

    lines = [
        f"{flag_header:<{flag_width}}  {status_header}",
        f"{'-' * flag_width}  {'-' * status_width}",
    ]
    lines.extend(f"{row[flag_header]:<{flag_width}}  {row[status_header]}" for row in rows)
    return "\n".join(lines)


def flags_status_yaml(manager: FlagsManager) -> str:
    flag_header, status_header = Constants.STATUS_HEADERS
    return YamlDumper.to_yaml_compatible_str({row[flag_header]: row[status_header] for row in flags_status(manager)})


def log_flags_status(manager: FlagsManager) -> None:
    logger = StructuredLogger(__name__, prefix="log_flags_status()> ")
    logger.info("flags status:\n" + format_flags_status(manager),
                register=manager.flags, active=manager.get_active_flags())
