"""Range-checked numeric conversions and strict parsing of textual values."""

from __future__ import annotations

import math
import re
import struct
import sys

from mariapp.types import ValueType

_FLT_MAX = float.fromhex("0x1.fffffep+127")
_FLT_MIN = 2.0**-126
_DBL_MAX = sys.float_info.max
_DBL_MIN = sys.float_info.min
_ULONG_MAX = 2**64 - 1

_RANGES = {
    ValueType.BOOLEAN: (0, 1),
    ValueType.UNSIGNED8: (0, 2**8 - 1),
    ValueType.SIGNED8: (-(2**7), 2**7 - 1),
    ValueType.UNSIGNED16: (0, 2**16 - 1),
    ValueType.SIGNED16: (-(2**15), 2**15 - 1),
    ValueType.UNSIGNED32: (0, 2**32 - 1),
    ValueType.SIGNED32: (-(2**31), 2**31 - 1),
    ValueType.UNSIGNED64: (0, _ULONG_MAX),
    ValueType.SIGNED64: (-(2**63), 2**63 - 1),
    ValueType.FLOAT32: (-_FLT_MAX, _FLT_MAX),
    ValueType.DOUBLE64: (-_DBL_MAX, _DBL_MAX),
}

# kinds parsed through a plain int and then range checked
_NARROW = frozenset(
    {
        ValueType.BOOLEAN,
        ValueType.UNSIGNED8,
        ValueType.SIGNED8,
        ValueType.UNSIGNED16,
        ValueType.SIGNED16,
        ValueType.SIGNED32,
    }
)

_C_SPACE = " \t\n\v\f\r"
_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(
    r"""
    (?P<sign>[+-]?)
    (?:
        (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)
      | (?P<dec>(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)
      | (?P<inf>inf(?:inity)?)
      | (?P<nan>nan(?:\([0-9a-z_]*\))?)
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)


def _zero(kind):
    if kind is ValueType.BOOLEAN:
        return False
    if kind in (ValueType.FLOAT32, ValueType.DOUBLE64):
        return 0.0
    return 0


def _to_float32(value):
    return struct.unpack("<f", struct.pack("<f", value))[0]


def checked_cast(value, kind):
    """Convert ``value`` to ``kind``; a value outside its range becomes zero."""
    kind = ValueType(kind)
    try:
        low, high = _RANGES[kind]
    except KeyError:
        raise TypeError(f"no numeric range for {kind.name}") from None

    if value < low or value > high:
        return _zero(kind)
    if kind is ValueType.BOOLEAN:
        return bool(value)
    if kind is ValueType.FLOAT32:
        return _to_float32(float(value))
    if kind is ValueType.DOUBLE64:
        return float(value)
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


def _skip_space(text):
    return len(text) - len(text.lstrip(_C_SPACE))


def _scan_integer(text):
    start = _skip_space(text)
    match = _INT_RE.match(text, start)
    if match is None:
        raise ValueError(f"no conversion could be performed for {text!r}")
    return int(match.group()), match.end()


def _scan_signed(text, bits):
    value, end = _scan_integer(text)
    if not -(2 ** (bits - 1)) <= value < 2 ** (bits - 1):
        raise OverflowError(f"{text!r} is out of range")
    return value, end


def _scan_unsigned(text):
    value, end = _scan_integer(text)
    if abs(value) > _ULONG_MAX:
        raise OverflowError(f"{text!r} is out of range")
    # a leading minus sign wraps around, as unsigned parsing does
    return value % (_ULONG_MAX + 1), end


def _scan_float(text, single):
    """Parse a leading float; return (value, end), value is NaN when out of range."""
    start = _skip_space(text)
    match = _FLOAT_RE.match(text, start)
    if match is None:
        raise ValueError(f"no conversion could be performed for {text!r}")
    end = match.end()
    sign = -1.0 if match.group("sign") == "-" else 1.0

    if match.group("nan") is not None:
        return math.copysign(math.nan, sign), end
    if match.group("inf") is not None:
        return sign * math.inf, end

    if match.group("hex") is not None:
        spelling = match.group("hex")
        mantissa = re.split(r"[pP]", spelling[2:])[0]
        nonzero = re.search(r"[1-9a-fA-F]", mantissa) is not None
        try:
            value = sign * float.fromhex(spelling)
        except OverflowError:
            return math.nan, end
    else:
        spelling = match.group("dec")
        mantissa = re.split(r"[eE]", spelling)[0]
        nonzero = re.search(r"[1-9]", mantissa) is not None
        value = sign * float(spelling)

    if math.isinf(value):
        return math.nan, end

    if single:
        try:
            value = _to_float32(value)
        except OverflowError:
            return math.nan, end
        smallest = _FLT_MIN
    else:
        smallest = _DBL_MIN

    if nonzero and abs(value) < smallest:
        return math.nan, end
    return value, end


def string_cast(text, kind):
    """Parse ``text`` as a value of ``kind``.

    Trailing characters yield zero, a number outside the parsable range raises
    OverflowError (floats become NaN instead), unparsable text raises ValueError.
    """
    kind = ValueType(kind)

    if kind in (ValueType.FLOAT32, ValueType.DOUBLE64):
        value, end = _scan_float(text, kind is ValueType.FLOAT32)
        return value if end == len(text) else 0.0

    if kind in (ValueType.UNSIGNED32, ValueType.UNSIGNED64):
        value, end = _scan_unsigned(text)
        if end != len(text):
            return 0
        return value if kind is ValueType.UNSIGNED64 else checked_cast(value, kind)

    if kind is ValueType.SIGNED64:
        value, end = _scan_signed(text, 64)
        return value if end == len(text) else 0

    if kind in _NARROW:
        value, end = _scan_signed(text, 32)
        if end != len(text):
            return _zero(kind)
        return checked_cast(value, kind)

    raise TypeError(f"cannot parse text as {kind.name}")