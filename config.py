"""
Configuration management for the component container.
Handles environment variables, JSON settings files and validation.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional, List, Callable
from dataclasses import dataclass, asdict, field

from dotenv import load_dotenv

from custom_logging import get_logger
from refer.exceptions import ConfigError

logger = get_logger("config")

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_dir: Optional[str] = None  # console only when unset
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5

    def as_logger_options(self) -> Dict[str, Any]:
        """Return the options understood by custom_logging.setup_logger."""
        return {
            "log_level": self.level,
            "log_dir": self.log_dir,
            "max_file_size": self.max_file_size,
            "backup_count": self.backup_count,
        }


@dataclass
class ContainerConfig:
    """Main configuration class for the container."""

    name: str = "container"
    description: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    config_file: Optional[str] = None

    def __post_init__(self):
        self._validate_config()

    def _validate_config(self):
        """Validate configuration values."""
        validation_errors = []

        if not self.name or not str(self.name).strip():
            validation_errors.append("Container name cannot be empty")

        if str(self.logging.level).upper() not in VALID_LOG_LEVELS:
            validation_errors.append(f"Invalid log level: {self.logging.level}")

        if self.logging.max_file_size < 1:
            validation_errors.append("Log max_file_size must be >= 1 byte")
        if self.logging.backup_count < 0:
            validation_errors.append("Log backup_count must be >= 0")

        if validation_errors:
            for error in validation_errors:
                logger.error(f"Config validation error: {error}")
            raise ConfigError(f"Configuration validation failed: {validation_errors}")


class ConfigManager:
    """Configuration manager for loading and saving container config."""

    def __init__(self):
        self.logger = get_logger("config_manager")
        load_dotenv()  # Load environment variables from .env file
        self.logger.debug("Loaded environment variables from .env")

    def load_config(self,
                    config_file: Optional[str] = None,
                    env_prefix: str = "CONTAINER_") -> ContainerConfig:
        """
        Load configuration from file and environment variables.

        Later sources win: defaults, then the JSON file, then the environment.

        Args:
            config_file: Path to JSON configuration file
            env_prefix: Prefix for environment variables

        Returns:
            ContainerConfig instance

        Raises:
            ConfigError: If the file cannot be parsed or validation fails
        """
        self.logger.info("Loading container configuration...")

        config_dict = asdict(ContainerConfig())

        if config_file and Path(config_file).exists():
            self.logger.info(f"Loading config from file: {config_file}")
            try:
                with open(config_file, 'r') as f:
                    file_config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in config file {config_file}: {e}") from e
            config_dict = self._deep_merge(config_dict, file_config)
            config_dict["config_file"] = config_file

        env_config = self._load_from_env(env_prefix)
        config_dict = self._deep_merge(config_dict, env_config)

        try:
            config = ContainerConfig(
                name=config_dict.get('name', 'container'),
                description=config_dict.get('description'),
                logging=LoggingConfig(**config_dict.get('logging', {})),
                config_file=config_dict.get('config_file'),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration setting: {e}") from e

        self.logger.info("Configuration loaded successfully")
        return config

    def _load_from_env(self, prefix: str) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        mappings: Dict[str, tuple] = {
            f"{prefix}NAME": (["name"], str),
            f"{prefix}DESCRIPTION": (["description"], str),
            f"{prefix}LOG_LEVEL": (["logging", "level"], str.upper),
            f"{prefix}LOG_DIR": (["logging", "log_dir"], str),
            f"{prefix}LOG_MAX_FILE_SIZE": (["logging", "max_file_size"], int),
            f"{prefix}LOG_BACKUP_COUNT": (["logging", "backup_count"], int),
        }

        for env_var, (path, convert) in mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            try:
                converted = self._convert_type(value, convert)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_var}: {value!r}") from e
            self._set_nested_value(env_config, path, converted)

        return env_config

    def _convert_type(self, value: str, convert: Callable[[str], Any]) -> Any:
        """Convert a string environment variable to its setting type."""
        return convert(value.strip())

    def _set_nested_value(self, dictionary: Dict[str, Any], path: List[str], value: Any):
        """Set a nested dictionary value using a path."""
        current = dictionary
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config: ContainerConfig, config_file: str):
        """Save configuration to JSON file."""
        self.logger.info(f"Saving configuration to: {config_file}")

        config_dict = asdict(config)
        config_dict.pop("config_file", None)
        with open(config_file, 'w') as f:
            json.dump(config_dict, f, indent=2)

        self.logger.info("Configuration saved successfully")


# Global configuration instance
_config_instance: Optional[ContainerConfig] = None


def get_config() -> ContainerConfig:
    """Get the global configuration instance."""
    global _config_instance
    if _config_instance is None:
        manager = ConfigManager()
        _config_instance = manager.load_config()
    return _config_instance


def init_config(config_file: Optional[str] = None) -> ContainerConfig:
    """Initialize configuration with optional config file."""
    global _config_instance
    manager = ConfigManager()
    _config_instance = manager.load_config(config_file)
    return _config_instance
