## sprintfjs — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import dataclasses

import pytest

from sprintfjs import parser
from sprintfjs.types import AST, Literal, Placeholder
from sprintfjs.errors import (FormatParseError, MalformedPlaceholder, InvalidIndexOrWidth,
                              InvalidKeyPath, MixedPlaceholderStyle)


def test_empty_format_gives_empty_ast():
    assert parser.parse("") == AST([])


def test_text_and_escaped_percent_are_literals():
    ast = parser.parse("100%% sure")
    assert list(ast) == [Literal("100"), Literal("%"), Literal(" sure")]


def test_placeholder_fields_are_decoded():
    [node] = parser.parse("%+'_-10.3f")
    assert node.type == 'f'
    assert node.sign is True
    assert node.pad == '_'
    assert node.left_align is True
    assert node.width == 10
    assert node.precision == '3'
    assert node.index is None and node.keys is None
    assert node.text == "%+'_-10.3f"


def test_zero_pad_is_taken_before_width():
    [node] = parser.parse("%010d")
    assert node.pad == '0'
    assert node.width == 10

    [node] = parser.parse("%10d")
    assert node.pad is None
    assert node.width == 10


def test_explicit_index_and_position():
    ast = parser.parse("ab %2$s %1$s")
    first, second = ast.placeholders
    assert (first.index, first.position) == (2, 3)
    assert (second.index, second.position) == (1, 8)


def test_every_type_character_is_recognized():
    for ch in 'bcdefgijostTuvxX':
        [node] = parser.parse('%' + ch)
        assert node.type == ch


def test_named_key_path_segments():
    [node] = parser.parse("%(user.name)s")
    assert node.keys == ('user', 'name')
    assert node.is_named


def test_index_segments_are_accepted_but_not_kept():
    # Documented quirk: `[n]` segments parse, yet never take part in traversal.
    [node] = parser.parse("%(users[0].name)s")
    assert node.keys == ('users', 'name')


def test_ast_nodes_are_immutable():
    ast = parser.parse("x %d")
    assert isinstance(ast, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ast[1].width = 3


def test_lone_percent_is_malformed():
    with pytest.raises(MalformedPlaceholder) as exc:
        parser.parse("100%")
    assert exc.value.position == 3
    assert exc.value.column == 4


def test_unknown_type_character_is_malformed():
    with pytest.raises(MalformedPlaceholder):
        parser.parse("%y")


def test_zero_explicit_index_is_malformed():
    with pytest.raises(MalformedPlaceholder):
        parser.parse("%0$s")


def test_error_position_reports_line_and_column():
    with pytest.raises(FormatParseError) as exc:
        parser.parse("first\nsecond %q")
    assert exc.value.line == 2
    assert exc.value.column == 8


@pytest.mark.parametrize("fmt", ["%(1abc)s", "%(a.)s", "%(a b)s", "%(a[x])s", "%(a.1)s"])
def test_invalid_key_paths(fmt):
    with pytest.raises(InvalidKeyPath):
        parser.parse(fmt)


def test_width_too_large():
    with pytest.raises(InvalidIndexOrWidth):
        parser.parse("%99999999999d")


def test_index_too_large():
    with pytest.raises(InvalidIndexOrWidth):
        parser.parse("%12345678901234567890$s")


@pytest.mark.parametrize("fmt", ["%(a)s %s", "%s %(a)s", "%(a)s %1$s", "%2$s %(a)s"])
def test_mixing_named_and_positional_fails(fmt):
    with pytest.raises(MixedPlaceholderStyle):
        parser.parse(fmt)


def test_mixing_explicit_and_implicit_positional_is_allowed():
    ast = parser.parse("%2$s %s")
    assert [n.index for n in ast.placeholders] == [2, None]


def test_parse_key_path_helper():
    assert parser.parse_key_path("a.b[3].c") == ('a', 'b', 'c')
    with pytest.raises(InvalidKeyPath):
        parser.parse_key_path("")
