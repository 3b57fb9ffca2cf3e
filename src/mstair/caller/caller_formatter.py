# File: src/mstair/caller/caller_formatter.py

import logging
from typing import Any, Literal

from colorama import Fore, Style

from mstair.caller.frame_source import f_code_filename_relative


__all__ = ["DEFAULT_FORMAT", "CallerFormatter", "get_color_code"]


FormatStyle = Literal["%", "{", "$"]

DEFAULT_FORMAT = "%(levelName)s %(fileAndLine)s %(method)s %(message)s"

COLOR_MAP: dict[str | None, str] = {
    # Code location colors
    "fileAndLine": Fore.CYAN,
    "method": Fore.BLUE,
    # Log level colors
    "DEBUG": Style.DIM,
    "INFO": Fore.WHITE,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.LIGHTRED_EX,
    "CRITICAL": Fore.RED + Style.BRIGHT,
    None: Fore.RESET + Style.RESET_ALL,
}


def get_color_code(key: str | None = None) -> str:
    """Return the ANSI code for a record field or level name; unknown keys reset."""
    return COLOR_MAP.get(key, COLOR_MAP[None])


class CallerFormatter(logging.Formatter):
    """
    Formatter for records produced by CallerLogger.

    Adds these record attributes for use in format strings:

    - ``fileAndLine``: source path relative to the script dir or cwd, plus line
    - ``method``: ``funcName()``, or ``<module>`` for module-level code
    - ``levelName``: the level name, colored when ``color`` is set
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        color: bool = False,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """
        :param fmt: The format string for log messages. Defaults to DEFAULT_FORMAT.
        :param datefmt: The date format string for log timestamps.
        :param style: The style for the format string (default is "%").
        :param validate: Whether to validate the format strings (default is True).
        :param color: Wrap the added fields in colorama color codes.
        :param defaults: Default values for format fields.
        """
        super().__init__(
            fmt=fmt or DEFAULT_FORMAT,
            datefmt=datefmt,
            style=style,
            validate=validate,
            defaults=defaults,
        )
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        record.fileAndLine = self._colored(
            "fileAndLine", self.format_fileAndLine(record.pathname, record.lineno)
        )
        record.method = self._colored("method", self.format_method(record.funcName))
        record.levelName = self._colored(record.levelname, record.levelname)
        return super().format(record)

    @staticmethod
    def format_fileAndLine(file: str, lineno: int) -> str:
        if not file:
            return f"<unknown file>:{lineno}"
        return f"{f_code_filename_relative(file)}:{lineno}"

    @staticmethod
    def format_method(funcName: str) -> str:
        return funcName if funcName.startswith("<") else f"{funcName}()"

    def _colored(self, key: str, text: str) -> str:
        if not self.color:
            return text
        return get_color_code(key) + text + get_color_code()


# End of file: src/mstair/caller/caller_formatter.py
