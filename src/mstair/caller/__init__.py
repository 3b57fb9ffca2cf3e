"""
package: mstair.caller
"""

# <AUTOGEN_INIT>
from mstair.caller import (
    caller_formatter,
    caller_logger,
    frame_source,
    names,
    resolver,
)


__all__ = [
    "caller_formatter",
    "caller_logger",
    "frame_source",
    "names",
    "resolver",
]
# </AUTOGEN_INIT>

from mstair.caller.frame_source import (
    CallerError,
    Frame,
    InsufficientFramesError,
    StackUnavailableError,
)
from mstair.caller.resolver import (
    DEFAULT_NUMBER_OF_FRAMES_TO_GET,
    Resolver,
    caller,
    helper,
    ignore_function,
    ignore_package,
    number_of_frames_to_get,
    package_name,
    register_internal_package,
    set_number_of_frames_to_get,
)


__all__ += [
    "DEFAULT_NUMBER_OF_FRAMES_TO_GET",
    "CallerError",
    "Frame",
    "InsufficientFramesError",
    "Resolver",
    "StackUnavailableError",
    "caller",
    "helper",
    "ignore_function",
    "ignore_package",
    "number_of_frames_to_get",
    "package_name",
    "register_internal_package",
    "set_number_of_frames_to_get",
]

__version__ = "0.1.0"
