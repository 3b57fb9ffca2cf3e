# File: src/mstair/caller/caller_logger.py
"""
A logging.Logger whose records point at the real caller.

Example:
    >>> from mstair.caller.caller_logger import get_caller_logger, initialize_root
    >>> initialize_root(level="INFO")
    >>> log = get_caller_logger(__name__)
    >>>
    >>> def warn_deprecated(name: str) -> None:
    ...     log.helper()
    ...     log.warning("%s is deprecated", name)

The record for the warning above names the function that called
warn_deprecated(), not warn_deprecated() itself.

Design:
- CallerLogger overrides findCaller() and resolves the frame with its own
  Resolver, which ignores the logging package and this module.
- Only the root logger owns handlers; initialize_root() is the single entry
  point for attaching the stderr handler and CallerFormatter.
"""

from __future__ import annotations

import logging
import sys
import traceback
from typing import TextIO

from mstair.caller.caller_formatter import CallerFormatter
from mstair.caller.frame_source import Frame
from mstair.caller.names import module_path
from mstair.caller.resolver import Resolver, register_internal_package


__all__: list[str] = [
    "CallerLogger",
    "get_caller_logger",
    "initialize_root",
]

_LOG_ROOT_ATTR_NAME = "_mstair_caller_initialized"

register_internal_package(__name__)


class CallerLogger(logging.Logger):
    """
    Logger that fills filename, lineno and funcName from a Resolver walk.

    Functions that wrap this logger call helper(), ignore_function() or
    ignore_package() so the records skip them and name their caller.
    """

    def __init__(
        self,
        name: str,
        level: int | str = logging.NOTSET,
    ) -> None:
        super().__init__(name, level)
        self.resolver = Resolver(ignored_packages=[module_path(logging.__name__)])
        """Ignore configuration consulted by findCaller()."""

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return "<{logger_class} '{name}' {level_name}={level}>".format(
            logger_class=self.__class__.__name__,
            name=self.name,
            level_name=logging.getLevelName(level),
            level=level,
        )

    def findCaller(
        self,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> tuple[str, int, str, str | None]:
        """
        Return (filename, lineno, funcName, stack_info) of the first non-ignored caller.

        Called by Logger._log(). ``stacklevel`` is not used; the ignore lists
        decide which frame is reported, and the stack text ends at that frame.
        """
        frame = self.resolver.caller()
        sinfo: str | None = None
        if stack_info:
            sinfo = "Stack (most recent call last):\n" + _format_stack_to(frame)
        return (frame.file, frame.line, frame.name, sinfo)

    def helper(self) -> None:
        """Skip the calling function in this logger's records."""
        self.resolver.helper()

    def ignore_function(self, name: str) -> None:
        """Skip the named function of the calling module in this logger's records."""
        self.resolver.ignore_function(name)

    def ignore_package(self) -> None:
        """Skip every function of the calling module in this logger's records."""
        self.resolver.ignore_package()


def _format_stack_to(frame: Frame) -> str:
    """Format the current stack from the outermost frame down to ``frame``."""
    summary = traceback.extract_stack()
    for index in range(len(summary) - 1, -1, -1):
        entry = summary[index]
        if (entry.filename, entry.lineno, entry.name) == (frame.file, frame.line, frame.name):
            del summary[index + 1 :]
            break
    return "".join(summary.format()).rstrip("\n")


def get_caller_logger(name: str) -> CallerLogger:
    """
    Create or retrieve a CallerLogger through logging.getLogger().

    Temporarily sets CallerLogger as the logger class so the logger joins the
    logging hierarchy (parent relationships, propagation, caplog).

    :param name: Logger name.
    :return: CallerLogger instance.
    :raises TypeError: If a logger of another class is already registered under this name.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not CallerLogger:
        logging.setLoggerClass(CallerLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not CallerLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, CallerLogger):
        raise TypeError(f"Failed to create CallerLogger: {logger!r}")
    return logger


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
    *,
    color: bool = False,
) -> None:
    """
    Idempotently attach one stderr handler with CallerFormatter to the root logger.

    - Tracks state on the root logger attribute, never in a module global.
    - If `force=True`, removes existing stderr handlers and recreates ours.
    - Does not touch non-stderr handlers owned by the host application.

    :param fmt: Format string. Defaults to caller_formatter.DEFAULT_FORMAT.
    :param datefmt: Date format.
    :param level: Root logger level (int or name). If None and root is NOTSET, WARNING is used.
    :param force: Reinitialize even if already initialized.
    :param color: Colorize the fields added by CallerFormatter.
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)

    if force:
        root.handlers = [
            h
            for h in root.handlers
            if not (isinstance(h, logging.StreamHandler) and h.stream is sys.stderr)
        ]

    stderr_handlers: list[logging.StreamHandler[TextIO]] = [
        h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    formatter = CallerFormatter(fmt, datefmt, color=color)
    if not stderr_handlers:
        handler: logging.StreamHandler[TextIO] = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    elif not any(isinstance(h.formatter, CallerFormatter) for h in stderr_handlers):
        stderr_handlers[0].setFormatter(formatter)

    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        root.setLevel(level)
    elif root.level == logging.NOTSET:
        root.setLevel(logging.WARNING)


# End of file: src/mstair/caller/caller_logger.py
