# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from mountparse.parsing.combinators import (
    begins_with,
    is_not,
    map_parser,
    Parser,
    separated_list,
)
from mountparse.parsing.escape import transform_escaped


def mount_opts() -> Parser[str]:
    """Parse a comma separated list of mount options, e.g. `rw,nosuid,mode=755`.

    Each option is the longest run of characters other than comma, space and
    tab, with escape sequences decoded. At least one option is required, so the
    empty string does not parse. A bad escape sequence in any option raises
    `EscapeDecodeError`.

    Examples:
    >>> mount_opts()(r"a,bc,d\\040e")
    (['a', 'bc', 'd e'], '')
    """
    option = map_parser(is_not(", \t"), transform_escaped)
    return separated_list(begins_with(","), option)
