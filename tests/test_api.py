## sprintfjs — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import threading

import pytest

import sprintfjs.api as S
from sprintfjs.errors import (SprintfError, ArgumentIndexOutOfRange, KeyPathTraversalError,
                              MixedPlaceholderStyle)


def test_positional_reordering():
    assert S.format("%2$s %3$s a %1$s", "cracker", "Polly", "wants") == "Polly wants a cracker"


def test_named_argument():
    assert S.format("Hello %(who)s!", {"who": "world"}) == "Hello world!"


def test_sign_before_zero_padding():
    assert S.format("%+010d", -123) == "-000000123"


def test_unsigned_negative():
    assert S.format("%u", -2) == "4294967294"


def test_truncate_then_pad():
    assert S.format("%5.1s", "xxxxxx") == "    x"


def test_pretty_json():
    assert S.format("%2j", {"foo": "bar"}) == '{\n  "foo": "bar"\n}'


def test_parse_then_format_ast_reuses_the_ast():
    ast = S.parse("Hello %(to)s!")
    before = tuple(ast)
    assert S.format_ast(ast, {"to": "world"}) == "Hello world!"
    assert S.format_ast(ast, {"to": "you"}) == "Hello you!"
    assert ast.render({"to": "again"}) == "Hello again!"
    assert tuple(ast) == before


def test_sprintf_aliases():
    assert S.sprintf("%s-%s", 1, 2) == "1-2"
    assert S.vsprintf("%s-%s", [1, 2]) == "1-2"


def test_escaped_percent_does_not_consume_arguments():
    assert S.format("%d%% of %d", 50, 10) == "50% of 10"


def test_explicit_indices_leave_the_cursor_alone():
    assert S.format("%2$s %s %s", "a", "b") == "b a b"


def test_named_placeholders_share_the_first_argument():
    data = {"user": {"name": "Ada", "langs": 3}}
    assert S.format("%(user.name)s knows %(user.langs)d", data) == "Ada knows 3"


def test_missing_named_key_renders_null():
    assert S.format("%(missing)s", {}) == "null"


def test_index_segments_do_not_traverse_sequences():
    # Documented quirk: `[n]` segments are skipped, only names walk the mapping.
    assert S.format("%(a[5].b)s", {"a": {"b": "x"}}) == "x"
    with pytest.raises(KeyPathTraversalError):
        S.format("%(a[0].b)s", {"a": [{"b": "x"}]})


def test_traversal_through_null_fails():
    with pytest.raises(KeyPathTraversalError) as exc:
        S.format("%(a.b)s", {"a": None})
    assert exc.value.key == "b"
    assert exc.value.value_type == "null"


def test_traversal_through_non_mapping_fails():
    with pytest.raises(KeyPathTraversalError) as exc:
        S.format("%(a.b)s", {"a": 5})
    assert exc.value.value_type == "int"


def test_named_without_arguments_fails():
    with pytest.raises(ArgumentIndexOutOfRange):
        S.format("%(a)s")


def test_explicit_index_out_of_range():
    with pytest.raises(ArgumentIndexOutOfRange) as exc:
        S.format("%3$s", "a", "b")
    assert isinstance(exc.value, IndexError)


def test_implicit_index_out_of_range_reports_needed_count():
    with pytest.raises(ArgumentIndexOutOfRange, match="need at least 3"):
        S.format("%s %s %s", "a", "b")


def test_mixed_styles_fail_at_parse_time():
    with pytest.raises(MixedPlaceholderStyle):
        S.format("%(a)s %s", {"a": 1}, 2)


def test_errors_share_one_base_class():
    for fmt, args in [("%", ()), ("%s", ()), ("%d", ("x",)), ("%(a)s %s", ())]:
        with pytest.raises(SprintfError):
            S.format(fmt, *args)


def test_format_is_deterministic():
    args = (3.5, "x", {"k": [1, 2]})
    assert S.format("%f %s %3j", *args) == S.format("%f %s %3j", *args)


def test_concurrent_rendering_of_one_ast():
    ast = S.parse("%05d|%-4s|%x")
    results = {}

    def work(i):
        results[i] = S.format_ast(ast, i, str(i), i)

    threads = [threading.Thread(target=work, args=(i,)) for i in range(16)]
    for t in threads: t.start()
    for t in threads: t.join()
    assert results == {i: f"{i:05d}|{str(i):<4}|{i:x}" for i in range(16)}
