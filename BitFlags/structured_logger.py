import inspect
import logging
import structlog
import yaml
from typing import List, Optional

PACKAGE_LOGGER_NAME = "BitFlags"

# Configure the standard Python logging to work with structlog
logging.basicConfig(
    format="%(message)s",
    level=logging.INFO,
)


def add_caller_info(_, __, event_dict):
    """Add the caller's function name and line number to the log entry."""
    frame = inspect.currentframe()

    # Skip frames from structlog, logging, and this module
    internal_modules = ['structlog', 'logging', 'structured_logger.py']

    while frame:
        frame = frame.f_back
        if not frame:
            break
        module_name = frame.f_code.co_filename
        if not any(internal in module_name for internal in internal_modules):
            event_dict["function"] = frame.f_code.co_name
            event_dict["file"] = frame.f_code.co_filename.replace("\\", "/").split("/")[-1]
            event_dict["line"] = frame.f_lineno
            break

    return event_dict


class DetailLevelFilter:
    """Filter debug events based on their detail level."""

    def __init__(self, default_level=1):
        self.default_level = default_level
        self.module_levels = {}

    def set_level(self, module=None, level=1):
        """Set the detail level for a specific module or globally."""
        if module:
            self.module_levels[module] = level
        else:
            self.default_level = level

    def get_level(self, module=None):
        if module and module in self.module_levels:
            return self.module_levels[module]
        return self.default_level

    def __call__(self, logger, method_name, event_dict):
        detail_level = event_dict.pop("_detail_level", 1)
        module = event_dict.get("logger", None)
        # debug (1) < debug2 (2) < debug3 (3)
        if method_name == "debug" and detail_level > self.get_level(module):
            raise structlog.DropEvent
        return event_dict


def add_prefix(_, __, event_dict):
    """Add prefix to the log message."""
    prefix = event_dict.pop("_prefix", "")
    if prefix and "event" in event_dict:
        event_dict["event"] = f"{prefix}{event_dict['event']}"
    return event_dict


class PrefixFilter:
    """Filter log events by prefix. None means allow all."""

    def __init__(self):
        self.allowed_prefixes = None

    def set_allowed_prefixes(self, prefixes=None):
        self.allowed_prefixes = prefixes

    def get_allowed_prefixes(self):
        return self.allowed_prefixes

    def __call__(self, logger, method_name, event_dict):
        if not self.allowed_prefixes:
            return event_dict
        message = event_dict.get("event", "")
        if any(message.startswith(prefix) for prefix in self.allowed_prefixes):
            return event_dict
        raise structlog.DropEvent


def format_yaml_values(_, __, event_dict):
    """Format complex values (lists, dicts) as flow-style YAML."""
    for key, value in list(event_dict.items()):
        if not isinstance(value, (str, int, float, bool, type(None))):
            try:
                event_dict[key] = yaml.safe_dump(value, default_flow_style=True).strip()
            except yaml.YAMLError:
                event_dict[key] = str(value)
    return event_dict


class MessageStore:
    """Store log messages for later retrieval."""

    def __init__(self):
        self.messages = []
        self.active = False

    def start_capture(self):
        self.messages = []
        self.active = True

    def stop_capture(self):
        self.active = False
        return list(self.messages)

    def get_messages(self):
        return list(self.messages)

    def clear(self):
        self.messages = []

    def __call__(self, logger, method_name, event_dict):
        if self.active:
            msg = f"{event_dict.get('level', 'info').upper()} "
            if "function" in event_dict:
                msg += f"[{event_dict.get('file', '')}:{event_dict.get('function', '')}:{event_dict.get('line', '')}] "
            msg += str(event_dict.get("event", ""))
            for key, value in event_dict.items():
                if key not in ("level", "function", "file", "line", "event", "logger", "timestamp"):
                    msg += f" {key}={value}"
            self.messages.append(msg)
        return event_dict


class CompactConsoleRenderer:
    """Renders `MM-DD HH:MM:SS [LVL] message key=value` with aligned continuation lines."""

    level_abbrevs = {
        'debug': 'DBG',
        'info': 'INF',
        'warning': 'WRN',
        'error': 'ERR',
        'critical': 'CRT',
        'exception': 'EXC',
    }
    level_to_color = {
        'critical': '\x1b[31;1m',
        'exception': '\x1b[31;1m',
        'error': '\x1b[31m',
        'warning': '\x1b[33m',
        'info': '\x1b[32m',
        'debug': '\x1b[34m',
    }
    reset_color = '\x1b[0m'
    filtered_keys = {'logger', 'logger_name', 'file', 'function', 'line'}

    def __init__(self, colors=False):
        self.colors = colors

    def __call__(self, logger, method_name, event_dict):
        timestamp = event_dict.pop('timestamp', '')
        level = event_dict.pop('level', 'info')
        event = event_dict.pop('event', '')

        # "2025-04-24 08:13:03" -> "04-24 08:13:03"
        if len(timestamp) > 10:
            timestamp = timestamp[5:]

        level_str = f"[{self.level_abbrevs.get(level, level[:3].upper())}]"
        if self.colors:
            level_str = f"{self.level_to_color.get(level, self.reset_color)}{level_str}{self.reset_color}"

        lines = str(event).split('\n')
        space_prefix = " " * (len(timestamp) + len(" [XXX] "))
        final_lines = [f"{timestamp} {level_str} {lines[0]}"]
        final_lines.extend(f"{space_prefix}{line}" for line in lines[1:])

        extra = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items())
                         if key not in self.filtered_keys)
        if extra:
            final_lines.append(f"{space_prefix}{extra}")
        return "\n".join(final_lines)


message_store = MessageStore()
detail_filter = DetailLevelFilter()
prefix_filter = PrefixFilter()

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        add_prefix,
        add_caller_info,
        detail_filter,
        prefix_filter,
        format_yaml_values,
        message_store,
        CompactConsoleRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)


class StructuredLogger:
    """Structured logger with debug detail levels and a message prefix."""

    def __init__(self, name, prefix=""):
        self.logger = structlog.get_logger(name)
        self.prefix = prefix

    def _log(self, method, msg, detail_level=1, **kwargs):
        kwargs["_detail_level"] = detail_level
        kwargs["_prefix"] = self.prefix
        getattr(self.logger, method)(msg, **kwargs)

    def debug(self, msg, **kwargs):
        self._log("debug", msg, detail_level=1, **kwargs)

    def debug2(self, msg, **kwargs):
        self._log("debug", msg, detail_level=2, **kwargs)

    def debug3(self, msg, **kwargs):
        self._log("debug", msg, detail_level=3, **kwargs)

    def info(self, msg, **kwargs):
        self._log("info", msg, **kwargs)

    def warning(self, msg, **kwargs):
        self._log("warning", msg, **kwargs)

    def error(self, msg, **kwargs):
        self._log("error", msg, **kwargs)

    def set_allowed_prefixes(self, prefixes=None):
        """
        Set allowed prefixes for messages.
        None or an empty string enables all messages; a single string is
        treated as a one-element list.
        """
        if isinstance(prefixes, str):
            prefixes = [prefixes] if prefixes else None
        prefix_filter.set_allowed_prefixes(prefixes)

    def get_allowed_prefixes(self):
        return prefix_filter.get_allowed_prefixes()


def configure_package_logging(level="INFO", detail_level=1):
    """Apply the configured level to the package logger and the debug detail level."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(
        level if isinstance(level, int) else logging.getLevelName(str(level).upper()))
    detail_filter.set_level(None, detail_level)


# Module-level functions for message capture
def start_message_capture():
    message_store.start_capture()


def stop_message_capture() -> List[str]:
    return message_store.stop_capture()


def get_stored_messages() -> List[str]:
    return message_store.get_messages()


def clear_stored_messages():
    message_store.clear()


def set_detail_level(level, module=None):
    detail_filter.set_level(module, level)


def get_detail_level(module=None):
    return detail_filter.get_level(module)


class DetailedException(Exception):
    """Exception that records the module, function and line it was raised from."""

    def __init__(self, message="An error occurred", frame_info: Optional[inspect.Traceback] = None):
        self.message = message
        if frame_info:
            self.file_name, self.line_number, self.func_name, _, _ = frame_info
        else:
            frame = inspect.currentframe().f_back
            # Step out of the constructors of this exception's own classes
            while frame.f_back and frame.f_locals.get("self") is self:
                frame = frame.f_back
            self.file_name = frame.f_code.co_filename
            self.line_number = frame.f_lineno
            self.func_name = frame.f_code.co_name
        self.module = self.__get_module_name()
        super().__init__(self.message)

    @classmethod
    def raise_from_here(cls, message="An error occurred"):
        frame_info = inspect.getframeinfo(inspect.currentframe().f_back)
        raise cls(message, frame_info)

    def __get_module_name(self):
        module = self.file_name.replace("\\", "/").split("/")[-1]
        if module.endswith('.py'):
            module = module[:-3]
        return module

    def _from_str(self):
        return f"{self.module}:{self.func_name}(){{{self.file_name}#{self.line_number}}}"

    def __str__(self):
        return f"{self.__class__.__name__} from: {self._from_str()}>>\n{self.message}"
