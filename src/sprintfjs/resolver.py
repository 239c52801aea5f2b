## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Sequence

from .types import Placeholder, classify
from .errors import ArgumentIndexOutOfRange, KeyPathTraversalError


def resolve_argument(node: Placeholder, args: Sequence[Any], cursor: int) -> tuple[Any, int]:
    """Pick the value a placeholder consumes and return it with the next implicit cursor.

    Named placeholders all read the argument under the cursor without consuming it, explicit
    `n$` indices leave the cursor alone, and implicit placeholders take one argument each.
    """
    if node.keys is not None:
        value = _argument_at(node, args, cursor)
        for key in node.keys:
            match classify(value):
                case "null":
                    raise KeyPathTraversalError(
                        f"Cannot access property `{key}` of null in `{'.'.join(node.keys)}`.",
                        placeholder=node, key=key, value_type="null")
                case "mapping":
                    value = value.get(key)
                case _:
                    raise KeyPathTraversalError(
                        f"Cannot access property `{key}` in value of type {type(value).__name__}.",
                        placeholder=node, key=key, value_type=type(value).__name__)
        return value, cursor

    if node.index is not None:
        if not (1 <= node.index <= len(args)):
            raise ArgumentIndexOutOfRange(
                f"Positional argument index {node.index} in `{node.text}` is out of range; "
                f"{len(args)} argument(s) given.", placeholder=node)
        return args[node.index - 1], cursor

    return _argument_at(node, args, cursor), cursor + 1


def _argument_at(node: Placeholder, args: Sequence[Any], cursor: int) -> Any:
    if not (0 <= cursor < len(args)):
        raise ArgumentIndexOutOfRange(
            f"Implicit argument index is out of range for `{node.text}`. "
            f"Not enough arguments, need at least {cursor + 1}.", placeholder=node)
    return args[cursor]
