"""
Seth RPC Logging System
=======================

A thread-safe logging utility for the RPC shim. This module integrates with
the standard Python `logging` library and the `rich` library to provide
sanitized, visually distinct console output plus a rotating log file.

Usage:
    >>> from seth_rpc.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("eth_getBalance")
"""

import logging
import logging.handlers
import re
import sys
import threading
import time
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.theme import Theme

from .constants import (
    LOG_LEVEL,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_MAX_FILE_SIZE,
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_HIGHLIGHTING,
    LOG_FILE_OUTPUT,
    LOG_FILE_PATH,
)


class LogManager:
    """
    Manages logging configuration via the Singleton pattern.

    The root logger is configured exactly once, with a 'Rich' console handler
    and an optional rotating file handler.

    Attributes:
        _instance (LogManager): The singleton instance.
        _lock (threading.Lock): Thread lock for atomic initialization.
    """

    _instance: Optional["LogManager"] = None
    _lock: threading.Lock = threading.Lock()


    def __new__(cls) -> "LogManager":
        """Creates or returns the existing singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance


    def __init__(self) -> None:
        if self._initialized:
            return
        self._configured = False
        self._initialized = True


    @staticmethod
    def validate_log_format(log_format: str) -> str:
        """
        Validates a logging format string by formatting a dummy record.

        Args:
            log_format (str): The logging format string (e.g., "%(asctime)s - %(message)s").

        Returns:
            str: The validated format string, or the default `LOG_FORMAT` if validation fails.
        """
        default = str(LOG_FORMAT.default())
        if not log_format:
            return default
        try:
            formatter = logging.Formatter(fmt=str(log_format))
            record = logging.LogRecord(
                name="test", level=logging.INFO, pathname="", lineno=0,
                msg="test", args=(), exc_info=None,
            )
            formatter.format(record)
            return str(log_format)
        except (ValueError, KeyError, TypeError) as e:
            print(
                f"{time.strftime(str(LOG_DATE_FORMAT.default()))} - seth_rpc.logger - "
                f"Validation Error: {e}. Using default.",
                file=sys.stderr,
            )
            return default


    def configure(
        self,
        log_level: Optional[str] = None,
        log_file: Optional[Path] = None,
        console_output: bool = True,
        file_output: Optional[bool] = None,
    ) -> None:
        """
        Configures the root logger with console and file handlers.

        Args:
            log_level (Optional[str]): Logging level (DEBUG, INFO, etc.). Defaults to `LOG_LEVEL`.
            log_file (Optional[Path]): Path to the log file. Defaults to `LOG_FILE_PATH`,
                relative paths resolving against the working directory.
            console_output (bool): Enable console logging. Defaults to True.
            file_output (Optional[bool]): Enable rotating file logging. Defaults to `LOG_FILE_OUTPUT`.
        """
        with self._lock:
            if self._configured:
                return

            level_str = log_level or str(LOG_LEVEL)
            numeric_level = getattr(logging, str(level_str).upper(), logging.INFO)

            root_logger = logging.getLogger()
            root_logger.setLevel(numeric_level)

            # Keep server and HTTP client chatter out of the RPC log
            for lib in ["httpx", "httpx._client", "uvicorn.access"]:
                logging.getLogger(lib).setLevel(logging.WARNING)
            for lib in ["uvicorn.error", "uvicorn", "uvicorn.asgi"]:
                logging.getLogger(lib).setLevel(logging.ERROR)

            root_logger.handlers.clear()

            log_format = self.validate_log_format(LOG_FORMAT)
            date_format = str(LOG_DATE_FORMAT) or str(LOG_DATE_FORMAT.default())

            # UTC timestamps
            formatter = TerminalSafeFormatter(fmt=log_format, datefmt=date_format + " UTC")
            formatter.converter = time.gmtime

            if console_output:
                if LOG_CONSOLE_HIGHLIGHTING:
                    theme = Theme(
                        {
                            "seth.address":        "cyan",
                            "seth.hex":            "bright_blue",
                            "seth.level_critical": "bold red reverse",
                            "seth.level_debug":    "bold dim",
                            "seth.level_error":    "bold red",
                            "seth.level_info":     "bold green",
                            "seth.level_warning":  "bold yellow",
                            "seth.logger_name":    "magenta",
                            "seth.method":         "bold white",
                            "seth.timestamp":      "bold cyan",
                        }
                    )

                    console = Console(theme=theme, highlight=False)

                    rich_handler = RichHandler(
                        console=console,
                        highlighter=SethLogHighlighter(),
                        keywords=[],
                        rich_tracebacks=True,
                        omit_repeated_times=False,
                        show_path=False,
                        show_time=False,
                        show_level=False,
                        markup=False,
                    )
                    rich_handler.setLevel(numeric_level)
                    rich_handler.setFormatter(formatter)
                    root_logger.addHandler(rich_handler)
                else:
                    console_handler = logging.StreamHandler(sys.stdout)
                    console_handler.setLevel(numeric_level)
                    console_handler.setFormatter(formatter)
                    root_logger.addHandler(console_handler)

            if file_output is None:
                file_output = bool(LOG_FILE_OUTPUT)

            if file_output:
                log_file_path = Path(log_file or str(LOG_FILE_PATH))
                log_file_path.parent.mkdir(parents=True, exist_ok=True)

                file_handler = logging.handlers.RotatingFileHandler(
                    filename=str(log_file_path),
                    maxBytes=LOG_MAX_FILE_SIZE,
                    backupCount=LOG_BACKUP_COUNT,
                    encoding="utf-8",
                )
                file_handler.setLevel(numeric_level)
                file_handler.setFormatter(formatter)
                root_logger.addHandler(file_handler)

            self._configured = True


    def reconfigure(self, **kwargs) -> None:
        """Drops the current configuration and applies a new one."""
        with self._lock:
            self._configured = False
        self.configure(**kwargs)


    def get_logger(self, name: str) -> logging.Logger:
        """
        Retrieves a logger for a specific module, configuring logging first if needed.

        Args:
            name (str): The name of the logger (typically `__name__`).

        Returns:
            logging.Logger: A standard Python logger.
        """
        if not self._configured:
            self.configure()
        return logging.getLogger(name)


class TerminalSafeFormatter(logging.Formatter):
    """
    A formatter that strips ANSI escape sequences and non-printable control
    characters, so request parameters echoed into the log cannot manipulate
    the terminal.
    """

    _ansi_escape_re = re.compile(
        r"\x1b\[[0-?]*[ -/]*[@-~]"
        r"|\x1b[@-Z\\-_]"
    )
    # Control chars (0x00-0x1F) excluding Tab and Newline
    _control_chars_re = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
    _carriage_return_re = re.compile(r"\r")


    @classmethod
    def sanitize(cls, text: str) -> str:
        if not text:
            return text
        text = cls._ansi_escape_re.sub("", text)
        text = cls._carriage_return_re.sub("", text)
        text = cls._control_chars_re.sub("", text)
        return text


    def format(self, record: logging.LogRecord) -> str:
        return self.sanitize(super().format(record))


class SethLogHighlighter(RegexHighlighter):
    """Rich highlighter for RPC method names, addresses and hex values."""

    base_style = "seth."
    highlights = [
        r"(?P<address>\b0x[0-9a-fA-F]{40}\b)",
        r"(?P<hex>\b0x[0-9a-fA-F]+\b)",
        r"(?P<level_critical>\bCRITICAL\b)",
        r"(?P<level_debug>\bDEBUG\b)",
        r"(?P<level_error>\bERROR\b)",
        r"(?P<level_info>\bINFO\b)",
        r"(?P<level_warning>\bWARNING\b)",
        r"\-\s+\w+\s+-\s+(?P<logger_name>[\w.]+)(?=\s-\s)",
        r"(?P<method>\b(eth|net|web3)_[A-Za-z]+\b)",
        r"(?P<timestamp>^(.*?)UTC)",
    ]


_manager = LogManager()

def get_logger(name: str) -> logging.Logger:
    """
    Public accessor of the logging system.

    Args:
        name (str): The name of the module requesting the logger.

    Returns:
        logging.Logger: The configured logger instance.
    """
    return _manager.get_logger(name)


def configure_logging(log_level: Optional[str] = None, **kwargs) -> None:
    """Re-applies logging configuration, e.g. after the CLI parsed `-v` flags."""
    _manager.reconfigure(log_level=log_level, **kwargs)
