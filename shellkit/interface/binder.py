#!/usr/bin/env python3
# shellkit/interface/binder.py
from __future__ import annotations

"""
Token -> typed value conversion for command parameters.

Supported conversions (by ParamKind family):
    - int / uint -> base-prefixed integer literal, range checked per width
    - float      -> 32 or 64-bit floating point
    - bool       -> 1/t/T/TRUE/true/True and 0/f/F/FALSE/false/False
    - str        -> original text
Every failure raises an ArgumentError subclass carrying index/token/kind.
"""

import math
import re
import struct
from typing import Any, Sequence

from shellkit.commands import ParamKind
from shellkit.errors import (
    IntegerOverflow,
    InvalidArgument,
    MissingArguments,
    UnsignedOverflow,
    UnsupportedParameterKind,
)

_INTEGER_RE = re.compile(
    r"0[xX](?:_?[0-9a-fA-F])+"
    r"|0[oO](?:_?[0-7])+"
    r"|0[bB](?:_?[01])+"
    r"|0(?:_?[0-7])*"
    r"|[1-9](?:_?[0-9])*"
)

# decimal, hex with a mandatory p exponent, signed inf/infinity, unsigned nan
_FLOAT_RE = re.compile(
    r"[+-]?(?:"
    r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
    r"|(?i:infinity|inf)"
    r")"
    r"|(?i:nan)"
)

_BOOL_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_BOOL_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _parse_integer(text: str, *, signed: bool) -> int | None:
    """Parse a Go-style integer literal; None when the text is malformed."""
    body = text
    sign = 1
    if body[:1] in ("+", "-"):
        if not signed:
            return None
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if not _INTEGER_RE.fullmatch(body):
        return None

    digits = body.replace("_", "")
    prefix = digits[:2].lower()
    if prefix == "0x":
        return sign * int(digits[2:], 16)
    if prefix == "0o":
        return sign * int(digits[2:], 8)
    if prefix == "0b":
        return sign * int(digits[2:], 2)
    if len(digits) > 1 and digits[0] == "0":
        # legacy octal: 010 == 8
        return sign * int(digits[1:], 8)
    return sign * int(digits, 10)


def _parse_float(text: str, bits: int) -> float | None:
    if not _FLOAT_RE.fullmatch(text):
        return None
    lowered = text.lower().lstrip("+-")
    try:
        if lowered.startswith("0x"):
            value = float.fromhex(text)
        else:
            value = float(text)
    except (ValueError, OverflowError):
        return None

    if math.isinf(value) and "inf" not in lowered:
        # finite literal out of range
        return None
    if bits == 32:
        try:
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            return None
    return value


def convert_value(kind: Any, text: str, index: int | None = None) -> Any:
    """Convert one token for a parameter of the given kind."""
    if not isinstance(kind, ParamKind):
        raise UnsupportedParameterKind(
            f"unsupported kind {kind!r}", index=index, token=text, kind=kind)

    def invalid() -> InvalidArgument:
        return InvalidArgument(
            f"invalid argument {text!r} for {kind.name.lower()}",
            index=index, token=text, kind=kind)

    family, bits = kind.family, kind.bits

    if family == "str":
        return text

    if family == "bool":
        if text in _BOOL_TRUE:
            return True
        if text in _BOOL_FALSE:
            return False
        raise invalid()

    if family == "float":
        value = _parse_float(text, bits)
        if value is None:
            raise invalid()
        return value

    if family == "int":
        number = _parse_integer(text, signed=True)
        if number is None:
            raise invalid()
        limit = 1 << (bits - 1)
        if not -limit <= number < limit:
            raise IntegerOverflow(
                f"value {text!r} overflows {kind.name.lower()}",
                index=index, token=text, kind=kind)
        return number

    if family == "uint":
        number = _parse_integer(text, signed=False)
        if number is None:
            raise invalid()
        if number >= 1 << bits:
            raise UnsignedOverflow(
                f"value {text!r} overflows {kind.name.lower()}",
                index=index, token=text, kind=kind)
        return number

    raise UnsupportedParameterKind(
        f"unsupported kind {kind!r}", index=index, token=text, kind=kind)


def bind_args(
    kinds: Sequence[Any],
    tokens: Sequence[str],
    *,
    required: int | None = None,
    varargs_kind: Any = None,
) -> list[Any]:
    """
    Convert `tokens` to values for the declared `kinds`.

    Returns one value per supplied token up to len(kinds) (never fewer than
    `required`, which defaults to len(kinds)). Surplus tokens are ignored
    unless `varargs_kind` is set, in which case they are converted with it.
    Raises the first ArgumentError encountered; no partial list escapes.
    """
    declared = len(kinds)
    required = declared if required is None else required

    if len(tokens) < required:
        raise MissingArguments(
            f"missing arguments: expected {required}, got {len(tokens)}",
            index=len(tokens))

    values = [
        convert_value(kinds[index], tokens[index], index)
        for index in range(min(len(tokens), declared))
    ]
    if varargs_kind is not None:
        values.extend(
            convert_value(varargs_kind, tokens[index], index)
            for index in range(declared, len(tokens))
        )
    return values
