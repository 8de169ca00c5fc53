"""Centralized logging configuration for tenant-gate.

Provides consistent, configurable logging with settings-based control
over verbosity, log levels and output format.
"""

import logging
import logging.config
from enum import Enum
from typing import Any, Dict, List, Optional

from .settings import TenantGateSettings, get_settings


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


_FORMATS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


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

    # Store adapters are chatty at INFO; keep them at WARNING unless debugging
    DEFAULT_QUIET_MODULES: List[str] = [
        "tenant_gate.features.sessions.repositories",
        "tenant_gate.features.permissions.repositories",
        "tenant_gate.features.modules.repositories",
        "tenant_gate.features.tenants.repositories",
        "tenant_gate.features.audit.repositories",
    ]

    # Modules that should only log errors
    ERROR_ONLY_MODULES: List[str] = [
        "asyncpg",
        "redis",
        "httpx",
        "httpcore",
        "asyncio",
    ]

    @classmethod
    def build_config(
        cls,
        verbosity: Optional[str] = None,
        log_format: Optional[str] = None,
        settings: Optional[TenantGateSettings] = None,
    ) -> Dict[str, Any]:
        """Build a ``dictConfig`` mapping; unset arguments fall back to ``settings``."""
        settings = settings or get_settings()
        verbosity = (verbosity or settings.log_verbosity).upper()
        log_format = (log_format or settings.log_format).lower()

        effective_log_level = get_log_level_from_verbosity(verbosity)
        try:
            format_string = _FORMATS[LogFormat(log_format)]
        except ValueError:
            format_string = _FORMATS[LogFormat.SIMPLE]

        logging_config: Dict[str, Any] = {
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
            "loggers": {},
        }

        for module in cls.DEFAULT_QUIET_MODULES:
            logging_config["loggers"][module] = {
                "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
            }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {"level": "ERROR"}

        return logging_config

    @classmethod
    def configure(
        cls,
        verbosity: Optional[str] = None,
        log_format: Optional[str] = None,
        settings: Optional[TenantGateSettings] = None,
    ) -> None:
        """Configure logging from arguments, falling back to ``settings``."""
        config = cls.build_config(verbosity, log_format, settings)
        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={config['root']['level']}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        """Silence all logging from a module."""
        cls.set_module_level(module_name, "CRITICAL")


def setup_logging(
    verbosity: Optional[str] = None,
    log_format: Optional[str] = None,
    settings: Optional[TenantGateSettings] = None,
) -> None:
    """Setup logging configuration.

    This is the main entry point for configuring logging in an application
    embedding the engine. It should be called once at startup.
    """
    LoggingConfig.configure(verbosity, log_format, settings)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
