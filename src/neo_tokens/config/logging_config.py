"""Centralized logging configuration for neo-tokens.

Provides consistent, configurable logging with environment-based control
over verbosity and log levels.
"""

import logging
import logging.config
import os
from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (warnings and above)
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


class LoggingConfig:
    """Centralized logging configuration manager."""
    
    # Per-token decode chatter; kept at WARNING unless token logging is enabled
    TOKEN_MODULES = [
        "neo_tokens.features.tokens",
    ]
    
    @classmethod
    def build_config(cls) -> dict:
        """Build a dictConfig mapping from environment variables."""
        log_verbosity = os.getenv("LOG_VERBOSITY", "NORMAL").upper()
        log_level = os.getenv("LOG_LEVEL")
        log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower()
        enable_token_logging = os.getenv("ENABLE_TOKEN_LOGGING", "false").lower() == "true"
        
        # An explicit LOG_LEVEL wins over the verbosity mode
        if log_level and log_level.upper() in LogLevel.__members__:
            effective_log_level = log_level.upper()
        else:
            effective_log_level = get_log_level_from_verbosity(log_verbosity)
        
        if log_format == LogFormat.JSON.value:
            format_string = '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}'
        elif log_format == LogFormat.DETAILED.value:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
        else:
            format_string = "%(asctime)s - %(levelname)s - %(message)s"
        
        logging_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {
                "neo_tokens": {
                    "level": effective_log_level,
                },
            },
        }
        
        if not enable_token_logging:
            for module in cls.TOKEN_MODULES:
                logging_config["loggers"][module] = {
                    "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
                }
        
        return logging_config
    
    @classmethod
    def configure(cls) -> None:
        """Configure logging based on environment variables."""
        logging_config = cls.build_config()
        logging.config.dictConfig(logging_config)
        
        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={logging_config['handlers']['console']['level']}")
    
    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a configured logger for the given module name.
        
        Args:
            name: Module name (usually __name__)
            
        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)
    
    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module.
        
        Args:
            module_name: Name of the module
            level: Log level to set
        """
        logger = logging.getLogger(module_name)
        logger.setLevel(getattr(logging, level.upper()))


def setup_logging() -> None:
    """Setup logging configuration from environment variables.
    
    This is the main entry point for configuring logging in the application.
    It runs once when the package is imported.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger.
    
    Args:
        name: Module name (usually __name__)
        
    Returns:
        Configured logger instance
    """
    return LoggingConfig.get_logger(name)
