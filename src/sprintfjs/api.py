## sprintfjs — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Sequence

from .types import AST, Literal, Placeholder, Int8, Int16, Int32, Int64, UInt, UInt8, UInt16, UInt32, UInt64
from .errors import *
from .parser import parse
from .resolver import resolve_argument
from .formatting import render_placeholder


def format_ast(ast: AST, *args: Any) -> str:
    """Render a parsed format string against `args`; the AST is never modified."""
    cursor, output = 0, []
    for node in ast:
        if isinstance(node, Literal):
            output.append(node.text)
            continue
        value, cursor = resolve_argument(node, args, cursor)
        output.append(render_placeholder(node, value))
    return ''.join(output)


def format(fmt: str, *args: Any) -> str:
    return format_ast(parse(fmt), *args)


def vsprintf(fmt: str, argv: Sequence[Any]) -> str:
    return format_ast(parse(fmt), *argv)


sprintf = format
