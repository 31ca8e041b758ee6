"""Helpers for reading typed fields out of decoded JSON objects."""
from typing import Any, Optional


_TYPE_NAMES = {bool: "bool", int: "int", str: "string", list: "array"}


def get_field(data: dict, key: str, kind: type, default: Any = None) -> Any:
    """Read a field from a decoded JSON object, checking its type.

    Missing keys and explicit nulls both yield ``default``.

    Raises:
        ValueError: If the field is present with the wrong JSON type
    """
    value = data.get(key)
    if value is None:
        return default

    # bool is an int subclass; keep the two apart
    wrong_bool = kind is int and isinstance(value, bool)
    if wrong_bool or not isinstance(value, kind):
        raise ValueError(
            f"cannot decode {type(value).__name__} into field {key} "
            f"of type {_TYPE_NAMES.get(kind, kind.__name__)}"
        )
    return value


def expect_object(data: Any, what: str) -> dict:
    """Ensure a decoded JSON value is an object."""
    if not isinstance(data, dict):
        raise ValueError(f"expected JSON object for {what}, got {type(data).__name__}")
    return data


def parse_bool(value: Optional[str]) -> bool:
    """Parse a boolean query parameter.

    Accepts 1, t, T, TRUE, true, True and their false counterparts;
    anything else is False.
    """
    return value in ("1", "t", "T", "TRUE", "true", "True")
