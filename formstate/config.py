"""
Configuration module for formstate.

Handles environment variables and default settings.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormConfig:
    """Configuration settings for formstate."""

    # Logging
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # set_value on a key the form was not built with raises when strict,
    # otherwise it is logged and ignored
    strict_keys: bool = True

    # Message reported when no union branch accepts a value
    invalid_union_message: str = "Invalid input"

    @classmethod
    def from_env(cls) -> "FormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            log_level=os.getenv("FORMSTATE_LOG_LEVEL", _defaults.log_level).upper(),
            log_format=os.getenv("FORMSTATE_LOG_FORMAT", _defaults.log_format),
            strict_keys=os.getenv("FORMSTATE_STRICT_KEYS", str(_defaults.strict_keys).lower()).lower() == "true",
            invalid_union_message=os.getenv("FORMSTATE_INVALID_UNION_MESSAGE", _defaults.invalid_union_message),
        )


config = FormConfig.from_env()


def get_config() -> FormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config


def setup_logging(cfg: FormConfig = None) -> None:
    """Configure root logging from the given (or current) configuration."""
    cfg = cfg or get_config()
    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.WARNING), format=cfg.log_format)
