# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Utilities for parsing strings.

A parser is a function str -> (list<T> | None, str) which takes an arbitrary
string and returns a tuple where the first element corresponds to the parsed
result and the second corresponds to the unconsumed part of the input string.
The parsed result is a list<T> on success and None on failure.

On failure, the second element is the input at the point where parsing stopped,
which is not necessarily the input the parser was given. Callers use it to
report where a line went wrong.
"""

from typing import Any, Callable, List, Optional, Tuple, TypeVar

from mountparse.errors import MountParseError
from typing_extensions import Protocol

_TResult = TypeVar("_TResult")
ParseResult = Tuple[Optional[List[_TResult]], str]
Parser = Callable[[str], ParseResult[_TResult]]
NonNullParseResult = Tuple[List[_TResult], str]
NonNullParser = Callable[[str], NonNullParseResult[_TResult]]

_TIn = TypeVar("_TIn")
_TOut = TypeVar("_TOut")


def begins_with(prefix: str) -> Parser[str]:
    """Returns a parser which parses a string with the given prefix"""

    def begins_with_parser(s: str) -> ParseResult[str]:
        if s.startswith(prefix):
            return [prefix], s[len(prefix) :]  # noqa: E203
        else:
            return None, s

    return begins_with_parser


def take_while(chars: str, min_count: int = 0) -> Parser[str]:
    """Returns a parser which consumes the longest prefix made only of `chars`.
    Fails if fewer than `min_count` characters match.
    """

    def take_while_parser(s: str) -> ParseResult[str]:
        end = 0
        while end < len(s) and s[end] in chars:
            end += 1
        if end < min_count:
            return None, s
        return [s[:end]], s[end:]

    return take_while_parser


def is_not(chars: str) -> Parser[str]:
    """Returns a parser which consumes the longest non-empty prefix containing
    none of `chars`.

    Examples:
    >>> is_not(" \\t")("abcd efg")
    (['abcd'], ' efg')
    >>> is_not(" \\t")(" abcd")
    (None, ' abcd')
    """

    def is_not_parser(s: str) -> ParseResult[str]:
        end = 0
        while end < len(s) and s[end] not in chars:
            end += 1
        if end == 0:
            return None, s
        return [s[:end]], s[end:]

    return is_not_parser


def value(parser: Parser[_TIn], v: _TOut) -> Parser[_TOut]:
    """Returns a parser which replaces a successful parse with `v`."""

    def value_parser(s: str) -> ParseResult[_TOut]:
        parsed, rest = parser(s)
        if parsed is None:
            return None, rest
        return [v], rest

    return value_parser


def discard_result(parser: Parser[_TIn]) -> Parser[_TOut]:
    """Returns a parser which discards the parsed result. It fails if the given
    parser fails.
    """

    def discard_result_parser(s: str) -> ParseResult[_TOut]:
        parsed, rest = parser(s)
        if parsed is None:
            return None, rest
        else:
            return [], rest

    return discard_result_parser


_T_co = TypeVar("_T_co", covariant=True)


class Addable(Protocol[_T_co]):
    def __add__(self, other: Any) -> _T_co: ...


_TAddable = TypeVar("_TAddable", bound=Addable)


def at_least_zero(parser: Parser[_TAddable]) -> NonNullParser[_TAddable]:
    """Returns a parser which runs a given parser until failure and returns
    the aggregated results. The failed attempt consumes nothing.
    """

    def at_least_zero_parser(s: str) -> NonNullParseResult[_TAddable]:
        acc: List[_TAddable] = []
        rest = s
        while True:
            parsed, rest_ = parser(rest)
            # a parser which succeeds without consuming would loop forever
            if parsed is None or rest_ == rest:
                return acc, rest
            acc.extend(parsed)
            rest = rest_

    return at_least_zero_parser


def first_of(parsers: List[Parser]) -> Parser:
    """Returns a parser which runs a list of parsers and greedily returns
    the first successful parse. Fails if all of the given parsers fail.
    """

    def first_of_parser(s: str) -> ParseResult:
        for parser in parsers:
            parsed, rest = parser(s)
            if parsed is not None:
                return parsed, rest
        # if no parser succeeded, then fail
        return None, s

    return first_of_parser


def chain(parsers: List[Parser]) -> Parser:
    """Returns a parser which runs a list of parsers sequentially and
    aggregates the results. Fails at the first parser which fails, leaving the
    input where that parser stopped.
    """

    def chain_parser(s: str) -> ParseResult:
        acc: List[Any] = []
        rest = s
        for parser in parsers:
            parsed, rest = parser(rest)
            if parsed is None:
                return None, rest
            acc.extend(parsed)
        return acc, rest

    return chain_parser


def map_parser(outer: Parser[str], inner: Parser[_TOut]) -> Parser[_TOut]:
    """Returns a parser which runs `inner` on each string produced by `outer`.
    `inner` must consume all of its input, otherwise the parse fails at the
    first character `inner` left behind. Errors raised by `inner` are re-raised
    with their remaining input extended to the rest of `s`.
    """

    def map_parser_(s: str) -> ParseResult[_TOut]:
        parsed, rest = outer(s)
        if parsed is None:
            return None, rest

        acc: List[_TOut] = []
        for text in parsed:
            try:
                mapped, leftover = inner(text)
            except MountParseError as e:
                raise e.with_remaining(e.remaining + rest) from None
            if mapped is None or leftover:
                # point into the original input, not the sub-string
                return None, leftover + rest
            acc.extend(mapped)
        return acc, rest

    return map_parser_


def separated_list(separator: Parser[Any], element: Parser[_TOut]) -> Parser[_TOut]:
    """Returns a parser for one or more `element`s separated by `separator`.
    A trailing separator is left unconsumed.

    Examples:
    >>> separated_list(begins_with(","), is_not(","))("a,b,c")
    (['a', 'b', 'c'], '')
    >>> separated_list(begins_with(","), is_not(","))("a,")
    (['a'], ',')
    """
    tail = at_least_zero(chain([discard_result(separator), element]))

    def separated_list_parser(s: str) -> ParseResult[_TOut]:
        first, rest = element(s)
        if first is None:
            return None, rest
        others, rest = tail(rest)
        return first + others, rest

    return separated_list_parser


def all_consuming(parser: Parser[_TOut]) -> Parser[_TOut]:
    """Returns a parser which fails unless `parser` consumes its whole input."""

    def all_consuming_parser(s: str) -> ParseResult[_TOut]:
        parsed, rest = parser(s)
        if parsed is None or rest:
            return None, rest
        return parsed, rest

    return all_consuming_parser
