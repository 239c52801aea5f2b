## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import json
import math
from typing import Any

from .types import Placeholder, classify
from .number import Number
from .errors import FormatRenderError, NotANumber, JSONEncodeError, PrecisionParseError


NUMERIC_TYPES = frozenset('bcdefgiouxX')
SIGNED_TYPES = frozenset('defgi')
MAX_PRECISION = 1_000_000

_LEADING_SIGN = re.compile(r'^[+-]')
_EXPONENT_ZEROS = re.compile(r'e([+-])0+(?=[0-9])')


def render_placeholder(node: Placeholder, value: Any) -> str:
    """Format one resolved argument as described by its placeholder, including sign and padding."""
    if node.type not in 'Tv' and classify(value) == "function":
        value = value()

    number = Number(value)
    if node.type in NUMERIC_TYPES and number.is_nan():
        raise NotANumber(f"Expecting number for `{node.text}` but found {type(value).__name__}.", placeholder=node)

    try:
        match node.type:
            case 'c': text = _code_point(number.to_int64())
            case 'b': text = f"{number.to_unsigned():b}"
            case 'o': text = f"{number.to_unsigned():o}"
            case 'x': text = f"{number.to_unsigned():x}"
            case 'X': text = f"{number.to_unsigned():X}"
            case 'u': text = str(number.to_unsigned())
            case 'd' | 'i': text = str(number.to_int64())
            case 'e': text = format_exponent(number.to_float(), _precision(node))
            case 'f': text = format_fixed(number.to_float(), _precision(node))
            case 'g': text = format_general(number.to_float(), _precision(node))
            case 'j':
                # Returned as-is, JSON output never takes signs or padding.
                return format_json(value, node)
            case 's' | 'v': text = _truncate(display_text(value), _precision(node))
            case 't': text = _truncate('true' if coerce_boolean(value) else 'false', _precision(node))
            case 'T': text = type_tag(value)
            case _: raise AssertionError(f"Unknown type character `{node.type}`.")
    except (ValueError, OverflowError) as exc:
        if isinstance(exc, FormatRenderError) or node.type not in NUMERIC_TYPES: raise
        raise NotANumber(f"Cannot format {value!r} as `{node.text}`: {exc}", placeholder=node) from exc

    sign = ''
    if node.type in SIGNED_TYPES:
        if not (positive := number.is_positive()) or node.sign:
            sign = '+' if positive else '-'
            text = _LEADING_SIGN.sub('', text, count=1)

    return aligned_pad(text, node.width, node.pad, node.left_align, sign)


def aligned_pad(text: str, width: int, pad: str | None, left_align: bool, sign: str = '') -> str:
    pad_char = pad or ' '
    padding = pad_char * max(width - len(sign) - len(text), 0) if width > 0 else ''
    if left_align:
        return sign + text + padding     # e.g. "-3     "
    if pad_char == '0':
        return sign + padding + text     # e.g. "-000003"
    return padding + sign + text         # e.g. "     -3"


def _precision(node: Placeholder) -> int | None:
    if node.precision is None: return None
    digits = node.precision.lstrip('0') or '0'
    if len(digits) > len(str(MAX_PRECISION)) or int(digits) > MAX_PRECISION:
        raise PrecisionParseError(f"Failed to parse precision `{node.precision}` in `{node.text}`; too large.",
                                  placeholder=node)
    return int(digits)

def _truncate(text: str, length: int | None) -> str:
    return text if length is None else text[:length]

def _code_point(code: int) -> str:
    if not (0 <= code <= 0x10FFFF) or 0xD800 <= code <= 0xDFFF:
        return '\ufffd'
    return chr(code)


## FLOATING POINT
def _shortest_digits(f: float) -> tuple[str, int]:
    """Shortest round-trip digits of abs(f), and the exponent `dp` such that abs(f) = 0.digits × 10^dp."""
    mantissa, _, exp = repr(abs(f)).partition('e')
    whole, _, frac = mantissa.partition('.')
    digits = (whole + frac).lstrip('0')
    if not digits: return '0', 1
    point = len(whole) - (len(whole + frac) - len(digits)) + (int(exp) if exp else 0)
    return digits.rstrip('0'), point

def _non_finite(f: float) -> str | None:
    if math.isnan(f): return 'NaN'
    if math.isinf(f): return '-Infinity' if f < 0 else 'Infinity'
    return None

def _negative(f: float) -> str:
    return '-' if math.copysign(1.0, f) < 0 else ''

def _fixed_from_digits(digits: str, point: int) -> str:
    if digits == '0': return '0'
    if point <= 0: return '0.' + '0' * -point + digits
    if point >= len(digits): return digits + '0' * (point - len(digits))
    return digits[:point] + '.' + digits[point:]

def _exponent_from_digits(digits: str, point: int, min_exp_digits: int) -> str:
    exp = 0 if digits == '0' else point - 1
    mantissa = digits[0] + ('.' + digits[1:] if len(digits) > 1 else '')
    return f"{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):0{min_exp_digits}d}"


def format_exponent(f: float, precision: int | None = None) -> str:
    """Scientific notation, with the exponent always written with as few digits as possible."""
    if (special := _non_finite(f)) is not None: return special
    if precision is None:
        return _negative(f) + _exponent_from_digits(*_shortest_digits(f), min_exp_digits=1)
    return _EXPONENT_ZEROS.sub(r'e\1', f"{f:.{precision}e}")

def format_fixed(f: float, precision: int | None = None) -> str:
    if (special := _non_finite(f)) is not None: return special
    if precision is None:
        return _negative(f) + _fixed_from_digits(*_shortest_digits(f))
    return f"{f:.{precision}f}"

def format_general(f: float, precision: int | None = None) -> str:
    """`%g`: significant digits when a precision is given, shortest round-trip digits otherwise."""
    if (special := _non_finite(f)) is not None: return special
    if precision is not None:
        return f"{f:.{precision}g}"
    digits, point = _shortest_digits(f)
    exp = point - 1 if digits != '0' else 0
    if exp < -4 or exp >= 6:
        return _negative(f) + _exponent_from_digits(digits, point, min_exp_digits=2)
    return _negative(f) + _fixed_from_digits(digits, point)

def number_text(f: float) -> str:
    """JavaScript `Number.prototype.toString()` rendering of a float."""
    if (special := _non_finite(f)) is not None: return special
    digits, point = _shortest_digits(f)
    exp = point - 1 if digits != '0' else 0
    if exp < -6 or exp >= 21:
        return _negative(f) + _exponent_from_digits(digits, point, min_exp_digits=1)
    return ('-' if f < 0 else '') + _fixed_from_digits(digits, point)


## TEXT, BOOLEANS, TYPES & JSON
def display_text(value: Any) -> str:
    """Natural string form of a value, as used by `%s` and `%v`."""
    match classify(value):
        case "null": return 'null'
        case "boolean": return 'true' if value else 'false'
        case "integer": return str(int(value))
        case "float": return number_text(value) if isinstance(value, float) else str(value)
        case "string": return value
        case "sequence": return '[' + ' '.join(display_text(v) for v in value) + ']'
        case "mapping":
            items = sorted((display_text(k), display_text(v)) for k, v in value.items())
            return 'map[' + ' '.join(f"{k}:{v}" for k, v in items) + ']'
        case "regexp": return value.pattern
        case "function": return repr(value)
    return str(value)

def coerce_boolean(value: Any) -> bool:
    match classify(value):
        case "null": return False
        case "boolean": return value
        case "integer" | "float": return value != 0
    return display_text(value) not in ('', '0')

def type_tag(value: Any) -> str:
    match classify(value):
        case "integer" | "float": return 'number'
        case "sequence": return 'array'
        case "mapping" | "object": return 'object'
        case kind: return kind

def format_json(value: Any, node: Placeholder) -> str:
    """Compact JSON, or pretty-printed with `width` spaces per level when a width is given."""
    try:
        if node.width > 0:
            return json.dumps(value, indent=node.width, ensure_ascii=False, allow_nan=False)
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise JSONEncodeError(f"Failed to encode {type(value).__name__} as JSON for `{node.text}`: {exc}",
                              placeholder=node) from exc


## TERMINAL OUTPUT
def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))
