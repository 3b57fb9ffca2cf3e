# File: src/mstair/caller/resolver.py
"""
Caller resolution with ignore lists, a la pytest's ``__tracebackhide__``.

A Resolver walks the call stack outward from the function that asked for its
caller and returns the first frame that is not ignored. Frames are ignored when
they belong to this library or to the import machinery, when their package
(module) was registered with ignore_package(), or when their fully-qualified
function name was registered with helper() or ignore_function().

Example:
    >>> from mstair.caller import Resolver
    >>> class Log(Resolver):
    ...     def setup(self) -> None:
    ...         self.ignore_function("Log.info")
    ...
    ...     def info(self, msg: str) -> None:
    ...         frame = self.caller()
    ...         print(f"{frame.file_relative}:{frame.line} {msg}")

Usage contract:
- Register ignore entries during single-threaded initialization; caller() is
  then safe to use from many threads.
- Mutations are serialized by a per-instance lock, but caller() does not lock.

The module-level functions delegate to a process-wide default Resolver so that
code which does not embed its own instance can share one ignore configuration.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Final

from mstair.caller import frame_source
from mstair.caller.frame_source import Frame, Frames, InsufficientFramesError, get_frames
from mstair.caller.names import module_path, package_name


__all__ = [
    "DEFAULT_NUMBER_OF_FRAMES_TO_GET",
    "RUNTIME_PACKAGES",
    "Resolver",
    "caller",
    "helper",
    "ignore_function",
    "ignore_package",
    "number_of_frames_to_get",
    "package_name",
    "register_internal_package",
    "set_number_of_frames_to_get",
]

DEFAULT_NUMBER_OF_FRAMES_TO_GET: Final[int] = 15
"""Frames fetched per caller() walk unless raised with set_number_of_frames_to_get()."""

RUNTIME_PACKAGES: Final[frozenset[str]] = frozenset(
    {"importlib/_bootstrap", "importlib/_bootstrap_external"}
)
"""Interpreter import machinery; present above module-level code that runs during an import."""

# Skip distances, counted from the capture helper in frame_source:
# _capture_stack, get_frames, <Resolver method>, <first candidate>
_REGISTRY_FRAMES_TO_GET: Final[int] = 5
_REGISTRY_SKIP: Final[int] = 3
# _capture_stack, get_frames, caller, <function that called caller>, <first candidate>
_CALLER_SKIP: Final[int] = 4

_LOG: logging.Logger = logging.getLogger(__name__)

_internal_packages: set[str] = {module_path(__name__), module_path(frame_source.__name__)}


def register_internal_package(module_name: str) -> None:
    """
    Treat a module as part of this library.

    Frames from internal modules are walked past when helper(), ignore_function()
    and ignore_package() look for their caller, and are always skipped by caller().
    Facades that wrap a Resolver (see mstair.caller.caller_logger) register
    themselves so their pass-through methods do not count as the caller.

    :param module_name: Dotted module name, usually ``__name__``.
    """
    _internal_packages.add(module_path(module_name))


def _is_internal_or_runtime(package: str) -> bool:
    return package in _internal_packages or package in RUNTIME_PACKAGES


@dataclass
class Resolver:
    """
    Ignore-list state plus the caller() stack walk.

    Embed it (subclass or hold an instance) in a logging facade. The zero-argument
    constructor gives an empty configuration using the default frame depth.
    """

    frame_depth: int = 0
    """Frames to fetch per walk; 0 means DEFAULT_NUMBER_OF_FRAMES_TO_GET."""

    ignored_packages: list[str] = field(default_factory=list)
    """Packages (module paths) whose frames caller() skips."""

    ignored_functions: list[str] = field(default_factory=list)
    """Fully-qualified function names whose frames caller() skips."""

    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        depth, self.frame_depth = self.frame_depth, 0
        self.set_number_of_frames_to_get(depth)
        self.ignored_packages = list(dict.fromkeys(self.ignored_packages))
        self.ignored_functions = list(dict.fromkeys(self.ignored_functions))

    def ignore_package(self) -> None:
        """
        Ignore every function in the calling function's package.

        Call this before any helper() calls from the same package: helper() and
        ignore_function() do not record functions whose package is already
        ignored, while entries recorded earlier are left in place.

        :raises InsufficientFramesError: If the calling package cannot be resolved.
        """
        package = ""
        for frame, more in get_frames(_REGISTRY_FRAMES_TO_GET, _REGISTRY_SKIP):
            package = package_name(frame.function)
            if package or not more:
                if package in _internal_packages and more:
                    continue
                break
        if not package:
            raise InsufficientFramesError("Was not able to get the package name")
        if _is_internal_or_runtime(package):
            return
        with self._lock:
            if package in self.ignored_packages:
                return
            self.ignored_packages.append(package)
        _LOG.debug("Ignoring package %s", package)

    def helper(self) -> None:
        """
        Mark the calling function as one to skip when resolving callers.

        Best for functions that are called rarely; each call walks the stack. For
        hot paths, register the function once with ignore_function(). Nothing is
        recorded if the function's package is already ignored.

        :raises InsufficientFramesError: If the calling function has no name and no frames remain.
        """
        found = self._find_calling_frame(get_frames(_REGISTRY_FRAMES_TO_GET, _REGISTRY_SKIP))
        if found is None:
            return
        self._add_ignored_function(found.function, package_name(found.function))

    def ignore_function(self, name: str) -> None:
        """
        Mark a function of the calling package as one to skip when resolving callers.

        The name is relative to the calling module: a module-level function is
        ``"func"``, a method is ``"Klass.method"``.

        :param name: Qualified name of the function within the calling module.
        :raises InsufficientFramesError: If the calling function has no name and no frames remain.
        """
        found = self._find_calling_frame(get_frames(_REGISTRY_FRAMES_TO_GET, _REGISTRY_SKIP))
        if found is None:
            return
        package = package_name(found.function)
        self._add_ignored_function(f"{package}.{name}", package)

    def set_number_of_frames_to_get(self, size: int) -> None:
        """Raise the number of frames fetched per walk; values not above the default are ignored."""
        if size > DEFAULT_NUMBER_OF_FRAMES_TO_GET:
            with self._lock:
                self.frame_depth = int(size)

    def number_of_frames_to_get(self) -> int:
        """Return the number of frames fetched per walk."""
        return self.frame_depth or DEFAULT_NUMBER_OF_FRAMES_TO_GET

    def caller(self) -> Frame:
        """
        Return the frame that called the function which called caller().

        Ignored frames are skipped. If every fetched frame is ignored, the last
        one is returned; raise the depth with set_number_of_frames_to_get() for
        very deep stacks. Called directly from a script's top-level code, where
        nothing encloses the calling frame, that frame itself is returned.
        """
        try:
            frames = get_frames(self.number_of_frames_to_get(), _CALLER_SKIP)
        except InsufficientFramesError:
            frames = get_frames(1, _CALLER_SKIP - 1)
        return self._walk(frames)

    def _walk(self, frames: Frames) -> Frame:
        found: Frame | None = None
        for found, more in frames:
            if not self._skip_frame(found) or not more:
                break
        if found is None:
            raise InsufficientFramesError("no frames to walk")
        return found

    def _skip_frame(self, frame: Frame) -> bool:
        """Return True if the frame is internal, runtime, or in one of the ignore lists."""
        function = frame.function
        package = package_name(function)
        if _is_internal_or_runtime(package):
            return True
        if package in self.ignored_packages:
            return True
        return function in self.ignored_functions

    @staticmethod
    def _find_calling_frame(frames: Frames) -> Frame | None:
        """Return the first frame outside this library, or None if the frames run out."""
        for frame, more in frames:
            if not frame.function:
                if not more:
                    raise InsufficientFramesError(
                        "Was not able to get the function name, ran out of frames"
                    )
                continue
            if not _is_internal_or_runtime(package_name(frame.function)):
                return frame
        return None

    def _add_ignored_function(self, function: str, package: str) -> None:
        with self._lock:
            if function in self.ignored_functions:
                return
            if _is_internal_or_runtime(package):
                return
            if package in self.ignored_packages:
                _LOG.debug("Not ignoring %s, package %s is already ignored", function, package)
                return
            self.ignored_functions.append(function)
        _LOG.debug("Ignoring function %s", function)


_default_resolver: Resolver = Resolver()


# Each facade function calls get_frames() itself so the skip distances match the
# Resolver methods exactly.


def caller() -> Frame:
    """Return the caller of the function that called this, using the default Resolver."""
    resolver = _default_resolver
    try:
        frames = get_frames(resolver.number_of_frames_to_get(), _CALLER_SKIP)
    except InsufficientFramesError:
        frames = get_frames(1, _CALLER_SKIP - 1)
    return resolver._walk(frames)


def helper() -> None:
    """Add the calling function to the default Resolver's ignore list."""
    _default_resolver.helper()


def ignore_function(name: str) -> None:
    """Add a function of the calling package to the default Resolver's ignore list."""
    _default_resolver.ignore_function(name)


def ignore_package() -> None:
    """Add the calling package to the default Resolver's ignore list."""
    _default_resolver.ignore_package()


def set_number_of_frames_to_get(size: int) -> None:
    """Raise the default Resolver's frame depth; only change it for very deep stacks."""
    _default_resolver.set_number_of_frames_to_get(size)


def number_of_frames_to_get() -> int:
    """Return the default Resolver's frame depth."""
    return _default_resolver.number_of_frames_to_get()


# End of file: src/mstair/caller/resolver.py
