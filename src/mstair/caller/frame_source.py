# File: src/mstair/caller/frame_source.py
"""
Module: mstair.caller.frame_source

Stack frame retrieval for caller resolution.

get_frames() captures a bounded slice of the current thread's call stack and
hands it out as a lazy Frames sequence. Raw frame objects are converted to
immutable Frame records only as they are pulled, so a walk that stops early
does not pay for the rest of the slice.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Iterable, Iterator
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from types import CodeType, FrameType
from typing import Any

from mstair.caller.names import module_path


__all__ = [
    "CallerError",
    "Frame",
    "Frames",
    "InsufficientFramesError",
    "StackUnavailableError",
    "f_code_filename_relative",
    "get_frames",
]


class CallerError(RuntimeError):
    """Base class for unrecoverable caller-resolution failures."""


class StackUnavailableError(CallerError):
    """No stack frames could be captured at all."""


class InsufficientFramesError(CallerError):
    """The stack is too shallow for the requested skip distance or caller lookup."""


def f_code_filename_relative(f_code_filename: str | Path) -> str:
    """
    Shorten a code object's filename for display.

    The path is made relative to the script directory (``sys.path[0]``) or, failing
    that, to the working directory. Paths under neither, and pseudo-files such
    as ``"<string>"``, are returned absolute. Separators are always ``/``.
    """
    path = Path(f_code_filename)
    for base in (sys.path[0] if sys.path else "", Path.cwd()):
        if not base:
            continue
        with suppress(ValueError):
            return path.relative_to(base).as_posix()
    return path.absolute().as_posix()


@dataclass(frozen=True)
class Frame:
    function: str
    """Fully-qualified function name, e.g. "mstair/caller/simple_log.MyCaller.double"."""

    file: str
    """Path to source file (script path, import path, "<string>", or "<stdin>")."""

    line: int
    """Line number currently executing in the frame."""

    module: str = ""
    """Dotted name of the module that defines the code, or "" if unknown."""

    qualname: str = ""
    """Qualified name of the function within its module."""

    @property
    def name(self) -> str:
        """Bare function name, as logging reports it in funcName."""
        return self.qualname.rsplit(".", 1)[-1] if self.qualname else self.function

    @property
    def file_relative(self) -> str:
        """The source path relative to the script directory or cwd."""
        return f_code_filename_relative(self.file)

    @classmethod
    def from_raw_frame(cls, raw_frame: FrameType) -> Frame:
        """
        Create a Frame from a frame object.
        Robust to interpreter teardown; missing attributes become empty values.
        """

        def _get_code_attr(code: CodeType | None, attr: str, default: str = "") -> str:
            val = getattr(code, attr, default)
            return val if isinstance(val, str) else default

        _f_code: CodeType | None = getattr(raw_frame, "f_code", None)
        _f_globals: dict[str, Any] = getattr(raw_frame, "f_globals", {})
        _module = _f_globals.get("__name__", "")
        _module = _module if isinstance(_module, str) else ""
        _qualname = _get_code_attr(_f_code, "co_qualname") or _get_code_attr(_f_code, "co_name")

        function = f"{module_path(_module)}.{_qualname}" if _module and _qualname else _qualname
        return cls(
            function=function,
            file=_get_code_attr(_f_code, "co_filename"),
            line=getattr(raw_frame, "f_lineno", None) or 0,
            module=_module,
            qualname=_qualname,
        )


class Frames:
    """
    Lazy, forward-only sequence of frames.

    Iterating yields ``(frame, more)`` pairs where ``more`` tells whether another
    frame follows. The sequence is exhausted after one pass.
    """

    def __init__(self, frames: Iterable[Frame]) -> None:
        self._frames: Iterator[Frame] = iter(frames)
        self._pending: Frame | None = next(self._frames, None)

    def __iter__(self) -> Frames:
        return self

    def __next__(self) -> tuple[Frame, bool]:
        frame = self._pending
        if frame is None:
            raise StopIteration
        self._pending = next(self._frames, None)
        return frame, self._pending is not None


def _capture_stack(limit: int) -> list[FrameType]:
    """
    Return up to `limit` frame objects, innermost first.

    Index 0 is this function's own frame, index 1 its caller, and so on.
    """
    frames: list[FrameType] = []
    frame: FrameType | None = inspect.currentframe()
    try:
        while frame is not None and len(frames) < limit:
            frames.append(frame)
            frame = frame.f_back
        return frames
    finally:
        # Break reference cycle: frame -> f_locals -> frame
        del frame


def get_frames(count: int, skip: int) -> Frames:
    """
    Capture up to ``count + skip`` frames and return all but the first ``skip``.

    Frame 0 of the capture is the internal capture helper and frame 1 is this
    function, so ``skip=2`` starts the sequence at the caller of get_frames().
    A script's ``<module>`` frame is the outermost frame of the main thread, so
    a capture may end right after the skipped frames; one remaining frame is
    enough.

    :param count: Number of frames wanted after skipping.
    :param skip: Number of innermost frames to discard.
    :return Frames: Lazy sequence over the remaining frames.
    :raises StackUnavailableError: If no frames could be captured.
    :raises InsufficientFramesError: If no frame remains after skipping.
    """
    raw_frames = _capture_stack(count + skip)
    captured = len(raw_frames)
    if captured == 0:
        # Interpreters without frame support return None from currentframe().
        raise StackUnavailableError("no callers")
    if skip >= captured:
        raise InsufficientFramesError(
            f"not enough frames: cannot skip {skip} of {captured} captured frames"
        )
    return Frames(Frame.from_raw_frame(f) for f in raw_frames[skip:])


# End of file: src/mstair/caller/frame_source.py
