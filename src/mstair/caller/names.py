# File: src/mstair/caller/names.py
"""
Module: mstair.caller.names

Parsing helpers for the fully-qualified function names produced by
mstair.caller.frame_source.

A fully-qualified function name is the defining module's dotted name with the
dots replaced by slashes, followed by a dot and the code object's qualname:

    mstair/caller/simple_log.MyCaller.double
    pkg/mod.outer.<locals>.inner

The "package" of a function is everything before the first dot after the last
slash, i.e. the module that defines it.
"""

from __future__ import annotations


__all__ = [
    "module_path",
    "package_name",
]


def module_path(module_name: str) -> str:
    """Return the slash-separated form of a dotted module name ("a.b.c" -> "a/b/c")."""
    return module_name.replace(".", "/")


def package_name(full_func_name: str) -> str:
    """
    Return the package (module path) portion of a fully-qualified function name.

    The first "." after the last "/" separates the package from the qualname. If
    there is no "/", the first "." in the whole string is used.

    Examples:
        >>> package_name("group/sub.Type.Method")
        'group/sub'
        >>> package_name("runtime.Caller")
        'runtime'
        >>> package_name("Caller")
        ''

    :param full_func_name: Fully-qualified function name,
        e.g. "mstair/caller/resolver.Resolver.caller".
    :return str: The package prefix, or "" if the name has no package part.
    """
    slash_index = full_func_name.rfind("/")
    if slash_index == -1:
        slash_index = 0
    dot_index = full_func_name.find(".", slash_index)
    if dot_index == -1:
        # Name alone; nothing to parse.
        return ""
    return full_func_name[:dot_index]


# End of file: src/mstair/caller/names.py
