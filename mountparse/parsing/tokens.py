# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Whitespace-delimited fields of a mount table line."""

from mountparse.parsing.combinators import (
    begins_with,
    discard_result,
    is_not,
    Parser,
    take_while,
)

WHITESPACE = " \t"


def not_whitespace() -> Parser[str]:
    """A non-empty run of anything but spaces and tabs.

    Examples:
    >>> p = not_whitespace()
    >>> p("abcd efg")
    (['abcd'], ' efg')
    >>> p(" abcdefg")
    (None, ' abcdefg')
    """
    return is_not(WHITESPACE)


def space0() -> Parser[str]:
    return discard_result(take_while(WHITESPACE, min_count=0))


def space1() -> Parser[str]:
    return discard_result(take_while(WHITESPACE, min_count=1))


def char(c: str) -> Parser[str]:
    if len(c) != 1:
        raise ValueError(f"Expected a single character, but got {c!r}")
    return begins_with(c)
