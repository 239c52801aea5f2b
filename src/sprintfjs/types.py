## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Any, Literal as LiteralType
from decimal import Decimal
from fractions import Fraction
from dataclasses import dataclass
from collections.abc import Mapping


TYPE_CHARS = frozenset('bcdefgijostTuvxX')


@dataclass(frozen=True)
class Literal:
    text: str

    def __repr__(self):
        return f"Literal({self.text!r})"


@dataclass(frozen=True)
class Placeholder:
    text: str                           # raw matched placeholder, e.g. `%+05.2f`
    type: str                           # one of TYPE_CHARS
    position: int = 0                   # offset of the `%` in the format string
    index: int | None = None            # explicit 1-based argument index
    keys: tuple[str, ...] | None = None # named mode key path
    sign: bool = False                  # `+` requested
    pad: str | None = None              # None for spaces, `0` or a custom character
    left_align: bool = False
    width: int = 0
    precision: str | None = None        # digits kept as text, `t` reads them as a length

    @property
    def is_named(self) -> bool:
        return self.keys is not None

    def __repr__(self):
        return f"Placeholder({self.text!r})"


Node = Literal | Placeholder


class AST(tuple):
    """Ordered, immutable sequence of nodes produced by `parse()`."""
    __slots__ = ()

    def __repr__(self):
        return "AST(" + ", ".join(repr(n) for n in self) + ")"

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        return tuple(n for n in self if isinstance(n, Placeholder))

    def render(self, *args) -> str:
        from .api import format_ast
        return format_ast(self, *args)


# Integer kinds with a known storage width, used to pick the unsigned reinterpretation.
class FixedInt(int):
    bits: int = 64
    signed: bool = True

    def __new__(cls, value=0):
        value = int(value) & ((1 << cls.bits) - 1)
        if cls.signed and value >> (cls.bits - 1):
            value -= 1 << cls.bits
        return super().__new__(cls, value)

    def __repr__(self):
        return f"{type(self).__name__}({int(self)})"

class Int8(FixedInt): bits, signed = 8, True
class Int16(FixedInt): bits, signed = 16, True
class Int32(FixedInt): bits, signed = 32, True
class Int64(FixedInt): bits, signed = 64, True
class UInt(FixedInt): bits, signed = 64, False
class UInt8(FixedInt): bits, signed = 8, False
class UInt16(FixedInt): bits, signed = 16, False
class UInt32(FixedInt): bits, signed = 32, False
class UInt64(FixedInt): bits, signed = 64, False


Kind = LiteralType["null", "boolean", "integer", "float", "string",
                   "mapping", "sequence", "regexp", "function", "object"]


def classify(value: Any) -> Kind:
    """Place any Python value into exactly one of the value kinds the renderer understands."""
    if value is None: return "null"
    if isinstance(value, bool): return "boolean"
    if isinstance(value, int): return "integer"
    if isinstance(value, (float, Fraction, Decimal)): return "float"
    if isinstance(value, str): return "string"
    if isinstance(value, Mapping): return "mapping"
    if isinstance(value, (list, tuple)): return "sequence"
    if isinstance(value, re.Pattern): return "regexp"
    if callable(value) and not isinstance(value, type): return "function"
    return "object"
