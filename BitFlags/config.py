import logging
import os
import sys
from typing import List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .basic_types import validate_flag_names
from .constants import Constants
from .exceptions import InvalidConfiguration
from .structured_logger import configure_package_logging


class Config:
    MAX_FLAG_BITS: int = Constants.MAX_SUPPORTED_BITS
    LOG_LEVEL: str = "INFO"
    LOG_DETAIL_LEVEL: int = 1
    DEFAULT_FLAG_NAMES: Optional[List[str]] = None

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not self.is_config_key(key):
                raise InvalidConfiguration(f"Unknown config key: {key}")
            setattr(self, key, value)

    @classmethod
    def is_config_key(cls, key) -> bool:
        return isinstance(key, str) and key.isupper() and hasattr(cls, key)

    def load_from_yaml(self, file_path=None):
        if file_path is None:
            file_path = os.environ.get(Constants.CONFIG_FILE_ENV_VAR)
        if not file_path:
            raise InvalidConfiguration(f"No config file given and {Constants.CONFIG_FILE_ENV_VAR} is not set")

        yaml_loader = YAML(typ='safe')

        try:
            with open(file_path, 'r', encoding='utf-8') as file:
                config_values = yaml_loader.load(file)
        except FileNotFoundError:
            print(f"Error: Config file not found at {file_path}", file=sys.stderr)
            raise InvalidConfiguration(f"Config file not found: {file_path}")
        except YAMLError as e:
            print(f"Error parsing config YAML file: {file_path}", file=sys.stderr)
            mark = getattr(e, 'problem_mark', None)
            if mark is not None:
                print(f"  Error occurred at line {mark.line + 1}, column {mark.column + 1}", file=sys.stderr)
                if getattr(e, 'problem', None):
                    print(f"  Problem: {e.problem}", file=sys.stderr)
            else:
                print(f"  Error details: {e}", file=sys.stderr)
            raise InvalidConfiguration(f"Invalid YAML in config file: {file_path}") from e

        if not isinstance(config_values, dict):
            print(f"Error: Config file {file_path} does not contain a valid dictionary.", file=sys.stderr)
            raise InvalidConfiguration(f"Config file {file_path} is not a mapping")

        # Unknown keys are ignored
        for key, value in config_values.items():
            if self.is_config_key(key):
                setattr(self, key, value)
        return self

    def validate(self):
        if (isinstance(self.MAX_FLAG_BITS, bool) or not isinstance(self.MAX_FLAG_BITS, int)
                or not 1 <= self.MAX_FLAG_BITS <= Constants.MAX_SUPPORTED_BITS):
            raise InvalidConfiguration(
                f"MAX_FLAG_BITS must be an integer between 1 and {Constants.MAX_SUPPORTED_BITS}, "
                f"got {self.MAX_FLAG_BITS!r}")
        if self.DEFAULT_FLAG_NAMES is not None:
            validate_flag_names(self.DEFAULT_FLAG_NAMES, self.MAX_FLAG_BITS)
        if not isinstance(logging.getLevelName(str(self.LOG_LEVEL).upper()), int):
            raise InvalidConfiguration(f"Unknown LOG_LEVEL: {self.LOG_LEVEL!r}")
        return self

    def apply_logging(self):
        configure_package_logging(self.LOG_LEVEL, self.LOG_DETAIL_LEVEL)
        return self


# Default global configuration instance
default_app_config = Config()
if os.environ.get(Constants.CONFIG_FILE_ENV_VAR):
    default_app_config.load_from_yaml()
default_app_config.validate()
default_app_config.apply_logging()
