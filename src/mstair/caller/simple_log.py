# File: src/mstair/caller/simple_log.py
"""
Minimal logging facade embedding a Resolver.

Each function builds a fresh MyCaller and optionally registers ignore entries.
It then returns either the frame MyCaller.caller() resolves or the configured
MyCaller, which the calling code resolves later through resolve(). Because
this module is a different package than its callers, it shows how package-
and function-level ignores interact when seen from outside.

Not imported by mstair.caller; import it explicitly.
"""

from mstair.caller.frame_source import Frame
from mstair.caller.resolver import Resolver


class MyCaller(Resolver):
    def not_in_ignore(self) -> Frame:
        return self.caller()

    def double(self) -> Frame:
        return self.not_in_ignore()


def caller_frame() -> Frame:
    """Ignore this function with helper(); resolves to whoever called it."""
    c = MyCaller()
    c.helper()
    return c.not_in_ignore()


def not_in_ignore() -> Frame:
    """Register nothing; resolves to this function."""
    c = MyCaller()
    return c.not_in_ignore()


def package() -> Frame:
    c = MyCaller()
    c.ignore_package()
    return c.double()


def package_helper() -> MyCaller:
    """Ignore this module, then call helper(); helper() records nothing."""
    c = MyCaller()
    c.ignore_package()
    c.helper()
    return c


def helper_package() -> MyCaller:
    """Call helper(), then ignore this module; the helper() entry is kept."""
    c = MyCaller()
    c.helper()
    # TODO: decide whether ignore_package() should prune ignored_functions entries
    # of the newly ignored package; it would cost a scan per call.
    c.ignore_package()
    return c


def resolve(c: MyCaller) -> Frame:
    return c.double()


# End of file: src/mstair/caller/simple_log.py
