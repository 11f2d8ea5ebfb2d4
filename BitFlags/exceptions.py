from .structured_logger import DetailedException


class InvalidFlag(DetailedException):
    """A value that is not a member of the register's flag definition set."""

    def __init__(self, flag, frame_info=None):
        self.flag = flag
        super().__init__(f"Invalid flag: {flag}", frame_info)


class InvalidConfiguration(DetailedException):
    """Malformed flag names, too many flags, or an unusable config file."""
