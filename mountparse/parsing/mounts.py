# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Grammar of a single `/proc/mounts` line.

    <device> <mount_point> <file_system_type> <options> 0 0

Fields are separated by runs of spaces or tabs. The device, the mount point and
each option are escape-decoded; the filesystem type is kept as is. The line
must be consumed completely, so unexpected extra columns are an error rather
than being silently dropped.
"""

import logging
from typing import List, Tuple, TypeVar

from mountparse.errors import MountParseError, TokenMismatchError, TrailingInputError
from mountparse.parsing.combinators import (
    all_consuming,
    chain,
    map_parser,
    Parser,
)
from mountparse.parsing.escape import transform_escaped
from mountparse.parsing.options import mount_opts
from mountparse.parsing.tokens import char, not_whitespace, space0, space1
from mountparse.schemas.mount import Mount

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_separator = space1()
_escaped_field = map_parser(not_whitespace(), transform_escaped)
_raw_field = not_whitespace()
_options_field = map_parser(not_whitespace(), mount_opts())
# the dump and pass fields, always "0 0" in /proc/mounts
_trailer = chain([char("0"), _separator, char("0")])


def _expect(parser: Parser[_T], s: str) -> Tuple[List[_T], str]:
    """Run `parser` on `s`, raising `TokenMismatchError` if it does not match."""
    parsed, rest = parser(s)
    if parsed is None:
        raise TokenMismatchError(rest)
    return parsed, rest


def _parse(s: str) -> Mount:
    # each step either advances the cursor or fails the whole line
    (device,), rest = _expect(_escaped_field, s)
    _, rest = _expect(_separator, rest)
    (mount_point,), rest = _expect(_escaped_field, rest)
    _, rest = _expect(_separator, rest)
    (file_system_type,), rest = _expect(_raw_field, rest)
    _, rest = _expect(_separator, rest)
    options, rest = _expect(_options_field, rest)
    _, rest = _expect(_separator, rest)
    _, rest = _expect(_trailer, rest)

    end, leftover = all_consuming(space0())(rest)
    if end is None:
        raise TrailingInputError(leftover)

    return Mount(
        device=device,
        mount_point=mount_point,
        file_system_type=file_system_type,
        options=tuple(options),
    )


def parse_line(line: str) -> Mount:
    """Parse one line of a mount table into a `Mount`.

    A single trailing line break is ignored. Raises a subclass of
    `MountParseError` if the line is malformed:
        * `TokenMismatchError` if a field, separator or trailing `0` is missing,
        * `EscapeDecodeError` if a field contains an unknown escape sequence,
        * `TrailingInputError` if anything follows the final `0`.

    Examples:
    >>> parse_line("tmpfs /tmp tmpfs rw,nosuid 0 0")
    Mount(device='tmpfs', mount_point='/tmp', file_system_type='tmpfs', options=('rw', 'nosuid'))
    """
    s = line.rstrip("\r\n")
    try:
        return _parse(s)
    except MountParseError as e:
        logger.debug(f"Failed to parse {s!r}: {e}")
        raise e.with_line(s) from None
