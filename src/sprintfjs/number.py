## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math
from typing import Any

from .types import FixedInt, classify


_INT_LITERAL = re.compile(r'[+-]?[0-9]+')
_FLOAT_LITERAL = re.compile(r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)', re.IGNORECASE)

INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1


def wrap_int(value: int, bits: int, signed: bool = True) -> int:
    """Two's-complement reinterpretation of `value` in a register of `bits` bits."""
    value &= (1 << bits) - 1
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def parse_float(text: str) -> float:
    if not _FLOAT_LITERAL.fullmatch(text):
        raise ValueError(f"Cannot use string {text!r} as a number.")
    return float(text)


class Number:
    """Numeric view over one argument value.  As in JavaScript, numeric strings count as numbers.

    Conversions are computed on demand and never modify the wrapped value; they raise
    `ValueError` (or `OverflowError` for infinities) when no numeric reading exists.
    """

    __slots__ = ('value', 'kind')

    def __init__(self, value: Any):
        self.value = value
        self.kind = classify(value)

    def __repr__(self):
        return f"Number({self.value!r})"

    def is_nan(self) -> bool:
        match self.kind:
            case "integer" | "float":
                return False
            case "string":
                return _FLOAT_LITERAL.fullmatch(self.value) is None
        return True

    def is_positive(self) -> bool:
        match self.kind:
            case "integer":
                if isinstance(self.value, FixedInt) and not self.value.signed: return True
                return self.to_int64() >= 0
            case "float":
                return self.to_float() >= 0
            case "string":
                try:
                    return parse_float(self.value) >= 0
                except ValueError:
                    return False
        return False

    def to_float(self) -> float:
        match self.kind:
            case "integer":
                if isinstance(self.value, FixedInt): return float(int(self.value))
                return float(self.to_int64())
            case "float":
                return float(self.value)
            case "string":
                return parse_float(self.value)
        raise ValueError(f"Cannot use {type(self.value).__name__} as float.")

    def to_int64(self) -> int:
        match self.kind:
            case "integer":
                return wrap_int(int(self.value), 64)
            case "float":
                # Fractions and decimals truncate exactly; math.trunc rejects NaN and infinities.
                return wrap_int(math.trunc(self.value), 64)
            case "string":
                if _INT_LITERAL.fullmatch(self.value) and INT64_MIN <= (whole := int(self.value)) <= INT64_MAX:
                    return whole
                return wrap_int(math.trunc(parse_float(self.value)), 64)
        raise ValueError(f"Cannot use {type(self.value).__name__} as int64.")

    def to_unsigned(self) -> int:
        """Unsigned reading, widened through 64 bits for 64-bit signed kinds and through 32 bits otherwise."""
        if isinstance(self.value, FixedInt):
            if not self.value.signed:
                return int(self.value)
            return wrap_int(int(self.value), 64 if self.value.bits > 32 else 32, signed=False)
        # Floats and numeric strings wrap through 32 bits too, so `%x` of "-255" is ffffff01.
        return wrap_int(self.to_int64(), 32, signed=False)
