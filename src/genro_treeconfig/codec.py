# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Scalar codecs for config values.

Entry values are always stored as text. This module converts between that
text and the Python types callers work with:

- str, int, float: their constructors
- bool: 'true'/'false' (also accepts yes/no, on/off, 1/0 on read)
- Color: six hex digits 'rrggbb', no prefix

Colors use 16-bit channels (0-65535) in memory and 8-bit channels in text.
The conversion truncates in both directions, so a round trip is lossy:

    >>> color_to_hex(Color(32768, 32768, 32768))
    '7f7f7f'
    >>> color_from_hex('7f7f7f')
    Color(red=32639, green=32639, blue=32639)
"""

from __future__ import annotations

from typing import Any, NamedTuple

_TRUE_WORDS = frozenset({'true', 'yes', 'on', '1'})
_FALSE_WORDS = frozenset({'false', 'no', 'off', '0'})


class Color(NamedTuple):
    """RGB color with 16-bit channels (0-65535)."""

    red: int
    green: int
    blue: int


def color_to_hex(color: Color) -> str:
    """Encode a color as 'rrggbb'.

    Each channel is scaled down with c * 255 // 65535.

    Example:
        >>> color_to_hex(Color(65535, 0, 0))
        'ff0000'
    """
    red = color.red * 255 // 65535
    green = color.green * 255 // 65535
    blue = color.blue * 255 // 65535
    return f"{(red << 16) | (green << 8) | blue:06x}"


def color_from_hex(text: str) -> Color:
    """Decode 'rrggbb' into a Color.

    Each 8-bit channel is scaled up with c * 65535 // 255.

    Raises:
        ValueError: If text is not a hexadecimal number.

    Example:
        >>> color_from_hex('00ff00')
        Color(red=0, green=65535, blue=0)
    """
    rgb = int(text.strip(), 16)
    return Color(
        ((rgb >> 16) & 0xff) * 65535 // 255,
        ((rgb >> 8) & 0xff) * 65535 // 255,
        (rgb & 0xff) * 65535 // 255,
    )


def encode_value(value: Any) -> str:
    """Convert a Python value to its stored text form.

    Args:
        value: str, bool, int, float or Color.

    Returns:
        Text representation.

    Raises:
        TypeError: If the value type has no text form.
    """
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, Color):
        return color_to_hex(value)
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(f"Cannot store value of type {type(value).__name__}")


def decode_value(text: str, type_: type = str) -> Any:
    """Convert stored text back to a Python value.

    Args:
        text: The stored text.
        type_: Target type (str, bool, int, float or Color).

    Returns:
        The decoded value.

    Raises:
        ValueError: If text is not valid for type_.
        TypeError: If type_ is not supported.
    """
    if type_ is str:
        return text
    if type_ is bool:
        word = text.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"Invalid boolean: {text!r}")
    if type_ is Color:
        return color_from_hex(text)
    if type_ in (int, float):
        return type_(text.strip())
    raise TypeError(f"Cannot decode value as {type_.__name__}")
