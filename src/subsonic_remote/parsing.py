"""Typed field extraction for Subsonic JSON payloads.

Every helper raises SubsonicParseError naming the wire field when the value
is absent or has the wrong type. Booleans are rejected wherever a number is
expected, since ``bool`` is a subclass of ``int`` in Python.
"""

import re
from typing import Any, Dict

from .exceptions import SubsonicParseError

_UNSIGNED = re.compile(r"[0-9]+", re.ASCII)

MAX_ID = 2**64 - 1
_MAX_ID_DIGITS = len(str(MAX_ID))


def require_object(raw: Any) -> Dict[str, Any]:
    """Return ``raw`` if it is a JSON object."""
    if not isinstance(raw, dict):
        raise SubsonicParseError("not an object")
    return raw


def _fetch(obj: Dict[str, Any], field: str) -> Any:
    if field not in obj:
        raise SubsonicParseError(f"missing field '{field}'", field=field)
    return obj[field]


def _wrong_type(field: str, expected: str) -> SubsonicParseError:
    return SubsonicParseError(f"field '{field}' is not {expected}", field=field)


def fetch_str(obj: Dict[str, Any], field: str) -> str:
    value = _fetch(obj, field)
    if not isinstance(value, str):
        raise _wrong_type(field, "a string")
    return value


def fetch_bool(obj: Dict[str, Any], field: str) -> bool:
    value = _fetch(obj, field)
    if not isinstance(value, bool):
        raise _wrong_type(field, "a boolean")
    return value


def fetch_int(obj: Dict[str, Any], field: str) -> int:
    value = _fetch(obj, field)
    if isinstance(value, bool) or not isinstance(value, int):
        raise _wrong_type(field, "an integer")
    return value


def fetch_unsigned(obj: Dict[str, Any], field: str) -> int:
    value = fetch_int(obj, field)
    if value < 0:
        raise _wrong_type(field, "an unsigned integer")
    return value


def fetch_float(obj: Dict[str, Any], field: str) -> float:
    value = _fetch(obj, field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _wrong_type(field, "a number")
    return float(value)


def fetch_list(obj: Dict[str, Any], field: str) -> list:
    value = _fetch(obj, field)
    if not isinstance(value, list):
        raise _wrong_type(field, "an array")
    return value


def parse_id(value: Any, field: str = "id", allow_int: bool = True) -> int:
    """Parse a wire identifier into an unsigned 64-bit integer.

    Subsonic sends ids as strings (``"1887"``). With ``allow_int`` a plain
    non-negative integer is accepted as well. Anything else, including
    ``"-1"``, ``"al-12"`` or a value above ``2**64 - 1``, fails the parse.
    """
    if isinstance(value, str):
        if len(value) > _MAX_ID_DIGITS or not _UNSIGNED.fullmatch(value):
            raise SubsonicParseError(f"field '{field}' is not a numeric id", field=field)
        value = int(value)
    elif not allow_int or not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise _wrong_type(field, "a numeric id")
    if value > MAX_ID:
        raise SubsonicParseError(f"field '{field}' is out of range", field=field)
    return value


def fetch_id(obj: Dict[str, Any], field: str = "id", allow_int: bool = True) -> int:
    return parse_id(_fetch(obj, field), field, allow_int)

