"""
Python leaf types recognized by the Type Bound Table, and marker types for
categories that Python's own types cannot tell apart.
"""

from __future__ import annotations

import datetime
import os
import sys
import sysconfig
import uuid
from typing import Any, NewType

Int8 = NewType("Int8", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

ZonedDateTime = NewType("ZonedDateTime", datetime.datetime)
Instant = NewType("Instant", datetime.datetime)
LegacyDateTime = NewType("LegacyDateTime", datetime.datetime)

# Keys are matched by identity/equality, never by subclass: bool must not fall into int.
PYTHON_LEAF_TYPES: dict[Any, str] = {
    Int8: "int8",
    Int32: "int32",
    Int64: "int64",
    int: "int64",
    Float32: "float32",
    Float64: "float64",
    float: "float64",
    bool: "boolean",
    str: "string",
    bytes: "binary",
    bytearray: "binary",
    memoryview: "binary",
    datetime.date: "date",
    datetime.datetime: "datetime",
    ZonedDateTime: "zoned_datetime",
    Instant: "instant",
    LegacyDateTime: "legacy_datetime",
    uuid.UUID: "uuid",
}

_PATHS = sysconfig.get_paths()
_STDLIB_DIRS = tuple({os.path.realpath(_PATHS[key]) for key in ("stdlib", "platstdlib")})
_SITE_DIRS = tuple({os.path.realpath(_PATHS[key]) for key in ("purelib", "platlib")})


def leaf_category(tp: Any) -> str | None:
    """Table category for a Python annotation, or None when it is not a table leaf."""
    try:
        return PYTHON_LEAF_TYPES.get(tp)
    except TypeError:
        # Unhashable annotation objects are never table leaves
        return None


def leaf_base_category(tp: type) -> str | None:
    """
    Table category of the nearest leaf ancestor of a class.

    class UserId(str) serializes as a string, so it takes the string row.
    """
    for klass in tp.__mro__[1:]:
        category = leaf_category(klass)
        if category is not None:
            return category
    return None


def _is_under(path: str, dirs: tuple[str, ...]) -> bool:
    return any(path == d or path.startswith(d + os.sep) for d in dirs)


def is_standard_type(tp: type) -> bool:
    """
    True for classes shipped with the interpreter (builtins and the stdlib).

    The module name must be a stdlib name and, when the module was loaded from a
    file, that file must live in the interpreter's stdlib directory. A user
    package that happens to be called "test" or "email" is not the stdlib.
    """
    module_name = getattr(tp, "__module__", None) or ""
    if module_name == "__main__":
        return False
    if module_name.split(".")[0] not in sys.stdlib_module_names:
        return False

    module = sys.modules.get(module_name)
    origin = getattr(getattr(module, "__spec__", None), "origin", None)
    if origin is None or origin in ("built-in", "frozen"):
        return True
    path = os.path.realpath(origin)
    if _is_under(path, _SITE_DIRS):
        return False
    return _is_under(path, _STDLIB_DIRS)
