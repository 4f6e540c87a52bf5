"""Configuration module for neo-tokens."""

from .logging_config import (
    setup_logging,
    get_logger,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

from .settings import (
    TokenSettings,
    get_token_settings,
    VALID_KEY_LENGTHS,
    required_key_capacity,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
    
    # Settings
    "TokenSettings",
    "get_token_settings",
    "VALID_KEY_LENGTHS",
    "required_key_capacity",
]
