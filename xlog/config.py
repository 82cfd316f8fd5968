"""
Configuration System - Logging configuration for xlog

Provides configuration loading from multiple sources with precedence
handling and environment variable substitution.
"""

import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from xlog.constants import (
    DEFAULT_BASE_NAME,
    DEFAULT_LEVEL,
    DEFAULT_LOG_DIRECTORY,
    DEFAULT_ROLL_SIZE,
    ENV_PREFIX,
    FAULT_MAPPING,
)
from xlog.levels import LogLevel
from xlog.writer import LogWriter, get_writer


class LoggingConfig:
    """
    Centralized logging configuration for xlog.

    Reads from file, environment variables or explicit overrides with
    proper precedence handling.

    Example configuration file (xlog_config.yml):
        logging:
          directory: /var/log/${ENVIRONMENT}
          base_name: app
          roll_size: 10485760  # 10MB
          level: INFO
    """

    DEFAULT_CONFIG = {
        "directory": DEFAULT_LOG_DIRECTORY,
        "base_name": DEFAULT_BASE_NAME,
        "roll_size": DEFAULT_ROLL_SIZE,
        "level": DEFAULT_LEVEL,
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from multiple sources.

        Precedence: Environment > File > Default

        Args:
            config_path: Path to configuration file

        Returns:
            Configuration dictionary

        Example:
            config = LoggingConfig.load("xlog_config.yml")
        """
        config = cls.DEFAULT_CONFIG.copy()

        if config_path and Path(config_path).exists():
            file_config = cls._load_from_file(config_path)
            if isinstance(file_config, dict) and isinstance(file_config.get("logging"), dict):
                config.update(file_config["logging"])

        config = cls._apply_env_overrides(config)

        return cls._substitute_env_vars(config)

    @classmethod
    def _load_from_file(cls, config_path: str) -> Optional[Dict[str, Any]]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary or None if the file can't be used
        """
        try:
            with open(config_path, "r") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            sys.stderr.write(FAULT_MAPPING["yaml_file_parse_issue"].format(file_path=config_path) + "\n")
            sys.stderr.write(f"Error details:\n{e}\n")
        except IOError:
            sys.stderr.write(FAULT_MAPPING["file_open_issue"].format(file_path=config_path) + "\n")
        return None

    @classmethod
    def _apply_env_overrides(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides.

        Environment variables:
            XLOG_LOG_DIR: Log directory
            XLOG_LOG_BASE_NAME: Log file base name
            XLOG_LOG_ROLL_SIZE: Max log file size before rotation
            XLOG_LOG_LEVEL: Log level (DEBUG, INFO, WARN, ERROR, FATAL)
        """
        env_mappings = {
            f"{ENV_PREFIX}DIR": "directory",
            f"{ENV_PREFIX}BASE_NAME": "base_name",
            f"{ENV_PREFIX}LEVEL": "level",
        }

        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                config[config_key] = os.environ[env_var]

        roll_size_var = f"{ENV_PREFIX}ROLL_SIZE"
        if roll_size_var in os.environ:
            try:
                config["roll_size"] = int(os.environ[roll_size_var])
            except ValueError:
                pass

        return config

    @classmethod
    def _substitute_env_vars(cls, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports ${VAR_NAME} syntax; unknown variables are left as they are.

        Example:
            directory: /var/log/${ENVIRONMENT}
            With ENVIRONMENT=production, becomes:
            directory: /var/log/production
        """
        if isinstance(config, str):

            def replace_env(match):
                return os.environ.get(match.group(1), match.group(0))

            return re.sub(r"\$\{([^}]+)\}", replace_env, config)

        elif isinstance(config, dict):
            return {k: cls._substitute_env_vars(v) for k, v in config.items()}

        elif isinstance(config, list):
            return [cls._substitute_env_vars(item) for item in config]

        else:
            return config

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> tuple:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, error_message)

        Example:
            is_valid, error = LoggingConfig.validate(config)
            if not is_valid:
                print(f"Invalid configuration: {error}")
        """
        level = config.get("level", DEFAULT_LEVEL)
        try:
            LogLevel.parse(level)
        except ValueError:
            return False, FAULT_MAPPING["invalid_level"].format(level=level, choices=", ".join(LogLevel.__members__))

        roll_size = config.get("roll_size", DEFAULT_ROLL_SIZE)
        if isinstance(roll_size, bool) or not isinstance(roll_size, int) or roll_size < 0:
            return False, FAULT_MAPPING["invalid_roll_size"].format(roll_size=roll_size)

        if not config.get("directory"):
            return False, FAULT_MAPPING["missing_directory"]

        if not config.get("base_name"):
            return False, FAULT_MAPPING["missing_base_name"]

        return True, ""

    @classmethod
    def setup_logging(cls, config_path: Optional[str] = None, writer: Optional[LogWriter] = None, **overrides):
        """
        Initialize a writer based on configuration.

        Args:
            config_path: Path to configuration file
            writer: Writer to set up (default: process default writer)
            **overrides: Configuration overrides (e.g., level="INFO")

        Returns:
            The initialized writer

        Raises:
            ValueError: if the resulting configuration is invalid

        Example:
            LoggingConfig.setup_logging(config_path="xlog_config.yml", level="INFO")
        """
        config = cls.load(config_path)
        config.update({key: value for key, value in overrides.items() if value is not None})

        is_valid, error = cls.validate(config)
        if not is_valid:
            raise ValueError(error)

        writer = writer or get_writer()
        writer.set_level(config["level"])
        writer.initialize(str(config["directory"]), str(config["base_name"]), config["roll_size"])
        return writer
