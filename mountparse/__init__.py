# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Parse the Linux mount table (`/proc/mounts`) into `Mount` records."""

from mountparse._version import __version__
from mountparse.errors import (
    EscapeDecodeError,
    LineError,
    MountParseError,
    ParseErrorKind,
    TokenMismatchError,
    TrailingInputError,
)
from mountparse.mounts import ErrorPolicy, iter_mounts, Mounts, mounts
from mountparse.parsing.mounts import parse_line
from mountparse.schemas.mount import Mount

__all__ = [
    "__version__",
    "ErrorPolicy",
    "EscapeDecodeError",
    "iter_mounts",
    "LineError",
    "Mount",
    "MountParseError",
    "Mounts",
    "mounts",
    "parse_line",
    "ParseErrorKind",
    "TokenMismatchError",
    "TrailingInputError",
]
