# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
r"""Backslash escapes used by the kernel when printing mount table fields.

Only two sequences are recognized: `\\` for a backslash and `\040` for a
space. Anything else following a backslash is an error.
"""

from typing import List

from mountparse.errors import EscapeDecodeError
from mountparse.parsing.combinators import (
    begins_with,
    first_of,
    is_not,
    Parser,
    ParseResult,
    value,
)

ESCAPE_CHAR = "\\"

# checked in this order at each escape character
_escaped_backslash: Parser[str] = value(begins_with("\\"), "\\")
_escaped_space: Parser[str] = value(begins_with("040"), " ")
escape_sequence: Parser[str] = first_of([_escaped_backslash, _escaped_space])

_unescaped_run: Parser[str] = is_not(ESCAPE_CHAR)


def transform_escaped(s: str) -> ParseResult[str]:
    """Decode all of `s`, returning the decoded text as a single result.

    Raises `EscapeDecodeError` with the input from the offending backslash
    onwards if an unknown escape sequence is found.
    """
    out: List[str] = []
    rest = s
    while rest:
        parsed, rest = _unescaped_run(rest)
        if parsed is not None:
            out.extend(parsed)
            continue

        # rest starts with the escape character
        literal, after = escape_sequence(rest[1:])
        if literal is None:
            raise EscapeDecodeError(rest)
        out.extend(literal)
        rest = after
    return ["".join(out)], rest


def decode(s: str) -> str:
    r"""Replace escape sequences in `s` with the characters they stand for.

    Examples:
    >>> decode(r"abc\040def\\g")
    'abc def\\g'
    >>> decode("/mnt/no-escapes")
    '/mnt/no-escapes'
    """
    parsed, _ = transform_escaped(s)
    assert parsed is not None
    return parsed[0]


def encode(s: str) -> str:
    """Inverse of `decode`."""
    return s.replace(ESCAPE_CHAR, "\\\\").replace(" ", "\\040")
