import sys
import traceback
from datetime import datetime
from typing import Optional, TextIO

from ..models.enums import LogLevel, LogCategory


# === ANSI COLORS ===
class Colors:
    """ANSI escape codes for colored terminal output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.LIFECYCLE: Colors.BRIGHT_CYAN,
    LogCategory.PIPELINE: Colors.BRIGHT_BLUE,
    LogCategory.SIGNAL: Colors.BRIGHT_MAGENTA,
    LogCategory.SHUTDOWN: Colors.MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

LEVEL_SYMBOLS = {
    LogLevel.DEBUG: '·',
    LogLevel.INFO: '✓',
    LogLevel.WARN: '⚠',
    LogLevel.ERROR: '✗',
}

LEVEL_COLORS = {
    LogLevel.DEBUG: Colors.DIM,
    LogLevel.INFO: Colors.GREEN,
    LogLevel.WARN: Colors.YELLOW,
    LogLevel.ERROR: Colors.RED,
}


# === CORE LOGGER ===
class Logger:
    """
    Structured logger with compact output format

    Format:
    [HH:MM:SS] CATEGORY · Message
               ├─ Detail 1
               └─ Detail 2

    Example:
    [14:23:45] PIPELINE  ✓ Phase completed
               └─ phase: REGISTER

    ERROR lines go to stderr, everything else to stdout. Streams are looked
    up on every call so redirected sys.stdout/sys.stderr are honoured.
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True,
                 stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None):
        """
        Initialize logger

        Args:
            min_level: Minimum log level to display
            use_colors: Enable ANSI color codes (disable for file output)
            stream: Fixed output stream (default: current sys.stdout)
            error_stream: Fixed stream for ERROR lines (default: current sys.stderr)
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream
        self.error_stream = error_stream
        self._level_priority = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def _should_log(self, level: LogLevel) -> bool:
        """Check if message should be logged based on level"""
        return self._level_priority[level] >= self._level_priority[self.min_level]

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors enabled"""
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _format_timestamp(self) -> str:
        """Format current time as [HH:MM:SS]"""
        return datetime.now().strftime('[%H:%M:%S]')

    def _format_category(self, category: LogCategory) -> str:
        """Format category name with color"""
        color = CATEGORY_COLORS.get(category, Colors.WHITE)
        return self._colorize(category.name.ljust(9), color)

    def _format_level_symbol(self, level: LogLevel) -> str:
        """Format level symbol with color"""
        symbol = LEVEL_SYMBOLS.get(level, '·')
        return self._colorize(symbol, LEVEL_COLORS.get(level, Colors.WHITE))

    def _stream_for(self, level: LogLevel) -> TextIO:
        if level is LogLevel.ERROR:
            return self.error_stream or sys.stderr
        return self.stream or sys.stdout

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        exception: Optional[BaseException] = None,
        **kwargs
    ):
        """
        Log a structured message

        Args:
            category: Log category (LIFECYCLE, PIPELINE, etc.)
            message: Main message text
            level: Log level (DEBUG, INFO, WARN, ERROR)
            details: List of detail strings to show below message
            exception: Exception whose traceback is appended as details
            **kwargs: Additional key-value pairs to show as details

        Example:
            logger.log(
                LogCategory.PIPELINE,
                "Phase failed",
                level=LogLevel.ERROR,
                phase="RUN",
                exception=err
            )

            Output:
            [14:23:45] PIPELINE  ✗ Phase failed
                       ├─ phase: RUN
                       ├─ Traceback (most recent call last):
                       └─ ValueError: boom
        """
        if not self._should_log(level):
            return

        stream = self._stream_for(level)

        timestamp = self._format_timestamp()
        cat = self._format_category(category)
        sym = self._format_level_symbol(level)
        msg = self._colorize(message, LEVEL_COLORS.get(level, Colors.WHITE))

        print(f"{timestamp} {cat} {sym} {msg}", file=stream)

        all_details = list(details or [])
        for k, v in kwargs.items():
            all_details.append(f"{k}: {v}")
        if exception is not None:
            formatted = traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )
            for chunk in formatted:
                all_details.extend(line for line in chunk.rstrip("\n").split("\n") if line)

        # Print details with tree structure
        if all_details:
            indent = " " * 11
            for i, d in enumerate(all_details):
                # Last item gets different tree character
                tree = "└─" if i == len(all_details) - 1 else "├─"
                print(f"{indent}{self._colorize(tree, Colors.DIM)} {d}", file=stream)

        stream.flush()

    # === Level helpers ===
    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    # === Contextual logger creation ===
    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Return a contextual logger bound to a specific category."""
        return BoundLogger(self, category)


class BoundLogger:
    """Logger bound to a default category, with ability to override if needed."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        """Allows overriding category if necessary."""
        self._base.log(category or self._category, message, level, **kw)

    # Shortcut methods
    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        """Create another bound logger from this one."""
        return BoundLogger(self._base, category)


# === Global instance helpers ===
_logger = Logger()


def get_logger() -> Logger:
    return _logger


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Configure the logger singleton (modify in-place, don't create new instance).

    Bound loggers created at import time keep a reference to the singleton,
    so it must never be replaced.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
