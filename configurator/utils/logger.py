import json
import logging
import sys
from typing import Any, Optional

from configurator.core.config import settings

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class Colors:
    """ANSI color codes for console output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'
    WHITE = '\033[37m'


LEVEL_COLORS = {
    logging.DEBUG: Colors.BRIGHT_CYAN,
    logging.INFO: Colors.BRIGHT_BLUE,
    logging.WARNING: Colors.BRIGHT_YELLOW,
    logging.ERROR: Colors.BRIGHT_RED,
    SUCCESS: Colors.BRIGHT_GREEN,
}

LEVEL_EMOJIS = {
    logging.DEBUG: "🔍",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    SUCCESS: "✅",
}


class ServiceFormatter(logging.Formatter):
    """
    Formats records as ``[TIME] 🔍 [SERVICE/CONTEXT] [LEVEL] message | k=v``.

    Service, context and fields come from the record's ``extra`` as set by
    ServiceLogger; plain records fall back to the logger name.
    """

    def __init__(self, enable_colors: bool = True):
        super().__init__()
        self.enable_colors = enable_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.enable_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%H:%M:%S") + f".{int(record.msecs):03d}"
        emoji = LEVEL_EMOJIS.get(record.levelno, "")
        level_color = LEVEL_COLORS.get(record.levelno, Colors.WHITE)

        service_context = getattr(record, "service", record.name.upper())
        context = getattr(record, "context", None)
        if context:
            service_context += f"/{context.upper()}"

        line = (
            f"{self._colorize(f'[{timestamp}]', Colors.DIM)} {emoji} "
            f"{self._colorize(f'[{service_context}]', Colors.BRIGHT_BLACK)} "
            f"{self._colorize(f'[{record.levelname}]', level_color + Colors.BOLD)} "
            f"{record.getMessage()}"
        )

        fields = getattr(record, "fields", None)
        if fields:
            line += self._colorize(f" | {format_fields(fields)}", Colors.DIM)

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def format_fields(fields: dict) -> str:
    extras = []
    for key, value in fields.items():
        if isinstance(value, (dict, list)):
            value_str = json.dumps(value, indent=None, separators=(',', ':'), default=str)
            if len(value_str) > 100:
                value_str = value_str[:100] + "..."
        else:
            value_str = str(value)
        extras.append(f"{key}={value_str}")
    return ", ".join(extras)


class ServiceLogger:
    """Per-service logger with a context tag and key=value fields"""

    def __init__(self, service_name: str):
        self.service_name = service_name.upper()
        self._logger = logging.getLogger(f"configurator.{service_name.lower()}")

    def _log(self, level: int, message: str, context: Optional[str] = None, **kwargs: Any):
        self._logger.log(
            level,
            message,
            extra={"service": self.service_name, "context": context, "fields": kwargs},
        )

    def debug(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(logging.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(logging.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(logging.ERROR, message, context, **kwargs)

    def success(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(SUCCESS, message, context, **kwargs)


def setup_logging(level: Optional[str] = None, enable_colors: Optional[bool] = None) -> None:
    """Attach the console handler to the package root logger (idempotent)."""
    root = logging.getLogger("configurator")
    root.setLevel((level or settings.LOG_LEVEL).upper())

    colors = settings.LOG_COLORS if enable_colors is None else enable_colors
    for handler in root.handlers:
        if isinstance(handler.formatter, ServiceFormatter):
            handler.formatter.enable_colors = colors
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServiceFormatter(enable_colors=colors))
    root.addHandler(handler)


# Global logger instances for different services
order_logger = ServiceLogger("ORDER")
inventory_logger = ServiceLogger("INVENTORY")
catalog_logger = ServiceLogger("CATALOG")
db_logger = ServiceLogger("DATABASE")
