"""Logging setup for the bridge, rendered through rich."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import ClassVar

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


@dataclass
class LoggerConfig:
    """Options forwarded to the RichHandler."""

    show_time: bool = True
    show_path: bool = False
    rich_tracebacks: bool = True
    console: Console | None = None


class BridgeLogger:
    """Logger factory sharing one RichHandler per configuration.

    A warm Lambda container imports the bridge once but may build many
    routers, so handlers are cached instead of stacked on every call.
    """

    _BRIDGE_THEME = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red on white bold",
            "logging.keyword": "bold blue",
        }
    )

    _handler_cache: ClassVar[dict[str, RichHandler]] = {}
    _cache_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get_logger(
        cls,
        name: str,
        level: int | None = None,
        config: LoggerConfig | None = None,
        format_string: str = "%(name)s - %(message)s",
    ) -> logging.Logger:
        """Return a logger wired to a cached RichHandler.

        Args:
            name: Logger name (typically __name__ from calling module)
            level: Optional log level override, defaults to LOG_LEVEL env var or INFO
            config: Optional LoggerConfig for handler options
            format_string: Format string for the handler

        Environment Variables:
            LOG_LEVEL: Default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            RICH_NO_COLOR: Set to disable colored output
        """
        if level is None:
            env_level = os.getenv("LOG_LEVEL", "INFO").upper()
            level = getattr(logging, env_level, logging.INFO)

        config = config or LoggerConfig()

        logger = logging.getLogger(name)
        logger.setLevel(level)

        if not logger.handlers:
            logger.addHandler(cls._get_cached_handler(config, level, format_string))
            # Lambda installs its own root handler; avoid duplicate lines
            logger.propagate = False

        return logger

    @classmethod
    def _get_cached_handler(cls, config: LoggerConfig, level: int, format_string: str) -> RichHandler:
        console_key = f"custom_{id(config.console)}" if config.console is not None else "default"
        handler_key = (
            f"{console_key}_{level}_{format_string}_"
            f"{config.show_time}_{config.show_path}_{config.rich_tracebacks}"
        )

        with cls._cache_lock:
            if handler_key not in cls._handler_cache:
                handler = RichHandler(
                    console=config.console or cls.create_console(),
                    show_time=config.show_time,
                    show_path=config.show_path,
                    rich_tracebacks=config.rich_tracebacks,
                    tracebacks_show_locals=level <= logging.DEBUG,
                    markup=False,
                )
                handler.setFormatter(logging.Formatter(fmt=format_string, datefmt="[%X]"))
                cls._handler_cache[handler_key] = handler
            return cls._handler_cache[handler_key]

    @classmethod
    def create_console(cls, width: int | None = None) -> Console:
        """Create a Console using the bridge theme."""
        return Console(
            theme=cls._BRIDGE_THEME,
            width=width,
            no_color=os.getenv("RICH_NO_COLOR") is not None,
        )

    @classmethod
    def clear_cache(cls) -> None:
        """Drop all cached handlers. Mostly useful in tests."""
        with cls._cache_lock:
            cls._handler_cache.clear()

    @classmethod
    def cached_handler_count(cls) -> int:
        with cls._cache_lock:
            return len(cls._handler_cache)
