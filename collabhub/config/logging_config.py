# =============================================================================
# File: collabhub/config/logging_config.py
# Description: Logging configuration using the Rich framework
# =============================================================================

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.theme import Theme


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key, '').lower()
    return value in ('true', '1', 'yes', 'on') if value else default


def get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


COLLABHUB_THEME = Theme({
    "logging.level.debug": "magenta dim",
    "logging.level.info": "green",
    "logging.level.warning": "dark_goldenrod",
    "logging.level.error": "red",
    "logging.level.critical": "bold red",
    "log.time": "grey70",
    "repr.str": "grey85",
})

PLAIN_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(name)-40s] %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party and internal loggers pinned to a level unless LOGLEVEL_<NAME> overrides
DEFAULT_NOISE_CONFIG = {
    "asyncio": logging.WARNING,
    "asyncpg": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "websockets": logging.WARNING,
    "prometheus_client": logging.WARNING,
    "multipart": logging.WARNING,
    "granian": logging.INFO,
    "granian.access": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "collabhub.realtime.rooms": logging.INFO,
    "collabhub.infra.email": logging.INFO,
}


class ProductionFormatter(logging.Formatter):
    """JSON formatter for production environments"""

    EXTRA_FIELDS = ("user_id", "project_id", "conn_id", "request_id", "event")

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if get_env_bool('LOG_JSON_INCLUDE_EXTRAS', True):
            for field in self.EXTRA_FIELDS:
                if hasattr(record, field):
                    log_obj[field] = getattr(record, field)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def get_logger_level_from_env(logger_name: str, default_level: int) -> int:
    """Get logger level from environment variable."""
    # e.g., "collabhub.realtime.rooms" -> "LOGLEVEL_COLLABHUB_REALTIME_ROOMS"
    env_name = f"LOGLEVEL_{logger_name.replace('.', '_').upper()}"

    level_str = os.getenv(env_name, '').upper()
    if level_str:
        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'WARN': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL,
        }
        return level_map.get(level_str, default_level)

    return default_level


def setup_logging(
        service_name: str = "collabhub",
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
        enable_json: Optional[bool] = None,
        rich_tracebacks: bool = True,
) -> None:
    """
    Configure process-wide logging.

    Rich console output on a TTY (or FORCE_COLOR), JSON lines when
    LOG_JSON_FORMAT is set, a plain formatter otherwise.

    Args:
        service_name: Name of the service (e.g., "api")
        log_level: Override log level
        log_file: Optional log file path (rotating)
        enable_json: Enable JSON formatting for production
        rich_tracebacks: Enable rich tracebacks (pretty exceptions)
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or os.getenv("LOG_FILE")

    if enable_json is None:
        enable_json = get_env_bool('LOG_JSON_FORMAT', False)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    use_rich = not enable_json and (sys.stdout.isatty() or get_env_bool("FORCE_COLOR", False))

    if use_rich:
        console = Console(
            theme=COLLABHUB_THEME,
            force_terminal=get_env_bool("FORCE_COLOR", False),
            width=get_env_int('LOG_CONSOLE_WIDTH', 0) or None,
        )
        rich_handler = RichHandler(
            console=console,
            rich_tracebacks=rich_tracebacks,
            show_path=get_env_bool("LOG_SHOW_PATH", False),
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
        root_logger.addHandler(rich_handler)

    elif enable_json:
        json_handler = logging.StreamHandler(sys.stdout)
        json_handler.setFormatter(ProductionFormatter())
        root_logger.addHandler(json_handler)

    else:
        plain_handler = logging.StreamHandler(sys.stdout)
        plain_handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATEFMT))
        root_logger.addHandler(plain_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=get_env_int('LOG_MAX_SIZE_MB', 100) * 1024 * 1024,
            backupCount=get_env_int('LOG_BACKUP_COUNT', 5),
            encoding=os.getenv('LOG_FILE_ENCODING', 'utf-8'),
        )
        # Always plain for files
        file_handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATEFMT))
        root_logger.addHandler(file_handler)

    for logger_name, default_level in DEFAULT_NOISE_CONFIG.items():
        logging.getLogger(logger_name).setLevel(get_logger_level_from_env(logger_name, default_level))

    # Explicit LOGLEVEL_* overrides for anything not in the noise table
    for key, value in os.environ.items():
        if not key.startswith('LOGLEVEL_'):
            continue
        logger_name = key[len('LOGLEVEL_'):].lower().replace('_', '.')
        if logger_name in DEFAULT_NOISE_CONFIG:
            continue
        level_value = logging.getLevelName(value.upper())
        if isinstance(level_value, int):
            logging.getLogger(logger_name).setLevel(level_value)

    logging.getLogger(f"{service_name}.startup").info(f"Logging configured for {service_name} service")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name
    """
    return logging.getLogger(name)


def log_section(logger: logging.Logger, title: str) -> None:
    """Log a section separator (Rich rule on a TTY, plain banner otherwise)"""
    if sys.stdout.isatty() and not get_env_bool('LOG_JSON_FORMAT', False):
        Console(theme=COLLABHUB_THEME).print(Rule(title.upper(), style="bright_blue"))
        return
    logger.info("=" * 60)
    logger.info(f"  {title.upper()}")
    logger.info("=" * 60)
