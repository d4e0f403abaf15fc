"""Merchant private data: free-form nested key/value trees.

Carts and items may carry a mapping that the API echoes back untouched in
notifications. Values are scalars, lists, or nested mappings. A list may
hold one further level of lists, which the encoder flattens into repeated
elements.
"""

from __future__ import annotations

from checkoutxml.domain.errors import InvalidValueError

type PrivateValue = str | int | float | bool | None | list[PrivateValue] | dict[str, PrivateValue]
type PrivateData = dict[str, PrivateValue]

_SCALARS = (str, int, float, bool, type(None))
_MAX_LIST_DEPTH = 2


def _check_value(value: object, path: str, list_depth: int) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            _check_value(child, f"{path}.{key}", 0)
    elif isinstance(value, list):
        if list_depth == _MAX_LIST_DEPTH:
            msg = f"Private data list at {path} nests deeper than {_MAX_LIST_DEPTH} levels"
            raise InvalidValueError(msg)
        for index, child in enumerate(value):
            _check_value(child, f"{path}[{index}]", list_depth + 1)
    elif not isinstance(value, _SCALARS):
        msg = f"Private data value at {path} must be a scalar, got {type(value).__name__}"
        raise InvalidValueError(msg)


def validate_private_data(value: object, field_name: str = "private_data") -> PrivateData | None:
    """Accept ``None`` or a mapping whose leaves are scalars.

    Lists may nest two levels deep; a mapping inside a list starts a new
    count.
    """
    if value is None:
        return None
    if not isinstance(value, dict):
        msg = f"{field_name} must be a mapping, got {type(value).__name__}"
        raise InvalidValueError(msg)
    _check_value(value, field_name, 0)
    return value
