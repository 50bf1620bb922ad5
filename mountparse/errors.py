# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Errors raised while parsing mount table lines."""

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    TOKEN_MISMATCH = "token_mismatch"
    ESCAPE_DECODE_FAILURE = "escape_decode_failure"
    TRAILING_INPUT = "trailing_input"


class MountParseError(ValueError):
    """A line could not be parsed.

    Attributes:
        kind: Which rule failed.
        remaining: The unconsumed input at the point of failure.
        line: The whole line, if known. Used to compute `column`.
    """

    kind: ParseErrorKind

    def __init__(self, remaining: str, line: Optional[str] = None) -> None:
        self.remaining = remaining
        self.line = line
        super().__init__(self._message())

    @property
    def column(self) -> Optional[int]:
        """Zero-based offset of `remaining` within `line`."""
        if self.line is None or not self.line.endswith(self.remaining):
            return None
        return len(self.line) - len(self.remaining)

    def with_remaining(self, remaining: str) -> "MountParseError":
        return type(self)(remaining, self.line)

    def with_line(self, line: str) -> "MountParseError":
        return type(self)(self.remaining, line)

    def _describe(self) -> str:
        return "Parse error at"

    def _message(self) -> str:
        msg = f"{self._describe()}: {self.remaining!r}"
        if self.column is not None:
            msg += f" (column {self.column})"
        return msg


class TokenMismatchError(MountParseError):
    kind = ParseErrorKind.TOKEN_MISMATCH

    def _describe(self) -> str:
        if not self.remaining:
            return "Unexpected end of line"
        return "Expected token not found at"


class EscapeDecodeError(MountParseError):
    kind = ParseErrorKind.ESCAPE_DECODE_FAILURE

    def _describe(self) -> str:
        return "Unrecognized escape sequence at"


class TrailingInputError(MountParseError):
    kind = ParseErrorKind.TRAILING_INPUT

    def _describe(self) -> str:
        return "Unexpected trailing input"


class LineError(Exception):
    """A line of a mount table could not be turned into a `Mount`.

    The message is deliberately generic; the underlying `MountParseError` or
    `OSError` is available as `cause`.
    """

    def __init__(
        self,
        line_number: int,
        cause: Exception,
        line: Optional[str] = None,
    ) -> None:
        super().__init__(
            "A read error occurred."
            if isinstance(cause, OSError)
            else "A parsing error occurred."
        )
        self.line_number = line_number
        self.cause = cause
        self.line = line
        self.__cause__ = cause

    def describe(self) -> str:
        """A diagnostic message including the line number and the cause."""
        return f"line {self.line_number}: {self.cause}"
