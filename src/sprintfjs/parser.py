## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

import lark
from .types import AST, Literal, Placeholder
from .errors import MalformedPlaceholder, InvalidIndexOrWidth, InvalidKeyPath, MixedPlaceholderStyle


GRAMMAR = r"""start: (TEXT | ESCAPED_PERCENT | PLACEHOLDER)*

TEXT: /[^%]+/
ESCAPED_PERCENT: "%%"
PLACEHOLDER: /%(?:[1-9][0-9]*\$|\([^)]+\))?\+?(?:0|'[^$])?-?[0-9]*(?:\.[0-9]+)?[b-gijostTuvxX]/
"""

KEY_PATH_GRAMMAR = r"""key_path: NAME (field_access | index_access)*
field_access: "." NAME
index_access: "[" INDEX "]"

NAME: /[A-Za-z_][A-Za-z0-9_]*/
INDEX: /[0-9]+/
"""

# Same shape as the PLACEHOLDER terminal, with groups for each field.
_PLACEHOLDER_FIELDS = re.compile(
    r"%(?:([1-9][0-9]*)\$|\(([^)]+)\))?(\+)?(0|'[^$])?(-)?([0-9]+)?(?:\.([0-9]+))?([b-gijostTuvxX])")

# Largest index or width accepted, as for widths and precisions in C-style formatters.
MAX_COUNT = 1_000_000

_FORMAT_PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer="contextual")
_KEY_PATH_PARSER = lark.Lark(KEY_PATH_GRAMMAR, start="key_path", parser="lalr", lexer="contextual")


def parse(source: str) -> AST:
    """Tokenize a format string into literal and placeholder nodes, in output order."""
    try:
        tree = _FORMAT_PARSER.parse(source)
    except lark.exceptions.UnexpectedInput as exc:
        pos = getattr(exc, 'pos_in_stream', None) or 0
        fragment = source[pos:pos+8]
        raise MalformedPlaceholder(f"Unexpected placeholder `{fragment}` at position {pos}.",
                                   source=source, position=pos, token=fragment) from None

    nodes, named, positional = [], None, None
    for token in tree.children:
        if token.type == 'TEXT':
            nodes.append(Literal(str(token)))
        elif token.type == 'ESCAPED_PERCENT':
            nodes.append(Literal('%'))
        else:
            node = _decode_placeholder(str(token), source, token.start_pos)
            if node.is_named: named = named or node
            else: positional = positional or node
            if named is not None and positional is not None:
                raise MixedPlaceholderStyle(
                    f"Mixing positional `{positional.text}` and named `{named.text}` placeholders is not supported.",
                    source=source, position=node.position, token=node.text)
            nodes.append(node)
    return AST(nodes)


def _decode_placeholder(text: str, source: str, position: int) -> Placeholder:
    m = _PLACEHOLDER_FIELDS.fullmatch(text)
    assert m is not None, "Placeholder token must match its own field pattern."
    index, key_path, sign, pad, align, width, precision, type_char = m.groups()

    def _count(digits: str | None, what: str) -> int | None:
        if digits is None: return None
        digits = digits.lstrip('0') or '0'
        if len(digits) > len(str(MAX_COUNT)) or (value := int(digits)) > MAX_COUNT:
            raise InvalidIndexOrWidth(f"Failed to parse {what} `{digits}` in `{text}`; too large.",
                                      source=source, position=position, token=text)
        return value

    return Placeholder(
        text=text,
        type=type_char,
        position=position,
        index=_count(index, 'positional argument'),
        keys=parse_key_path(key_path, source=source, position=position) if key_path is not None else None,
        sign=sign is not None,
        pad=pad[-1] if pad else None,
        left_align=align is not None,
        width=_count(width, 'width') or 0,
        precision=precision,
    )


def parse_key_path(path: str, *, source: str | None = None, position: int | None = None) -> tuple[str, ...]:
    """Names used to walk into a mapping argument.  `[n]` segments are accepted but not kept."""
    try:
        tree = _KEY_PATH_PARSER.parse(path)
    except lark.exceptions.UnexpectedInput:
        raise InvalidKeyPath(f"Failed to parse named argument key `{path}`.",
                             source=source, position=position, token=path) from None

    keys = []
    for child in tree.children:
        if isinstance(child, lark.Token):
            keys.append(str(child))
        elif child.data == 'field_access':
            keys.append(str(child.children[0]))
    return tuple(keys)


def format_parse_error_context(source: str, line: int, column: int, token_value: str) -> str:
    """Show the lines of a format string around an error, with the failing fragment highlighted."""
    lines = source.splitlines() or ['']
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = []

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+len(token_value)-1]}\033[0m" +
                    line_content[column+len(token_value)-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
