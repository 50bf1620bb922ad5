# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Iterate over the mounts listed in a mount table such as `/proc/mounts`."""

import logging
from enum import Enum
from types import TracebackType
from typing import (
    Callable,
    Generator,
    Iterable,
    Iterator,
    Optional,
    Type,
    Union,
)

from mountparse.errors import LineError, MountParseError
from mountparse.parsing.mounts import parse_line
from mountparse.schemas.mount import Mount

logger = logging.getLogger(__name__)

PROC_MOUNTS = "/proc/mounts"

MountResult = Union[Mount, LineError]


class ErrorPolicy(Enum):
    """What to do with a line which cannot be parsed or read."""

    # produce a `LineError` in place of the `Mount` and keep going
    YIELD = "yield"
    # log a warning and keep going
    SKIP = "skip"
    # raise the `LineError`, ending the iteration
    RAISE = "raise"


class Mounts:
    """A single pass over the lines of a mount table.

    Each line is read, parsed and handed out once, in order. There is no way to
    rewind; construct a new `Mounts` (e.g. with `Mounts.open()`) to go over the
    table again. The underlying source is closed when the iteration ends, when
    `close()` is called or when used as a context manager and the block exits.

    Example:
    >>> with Mounts.open() as ms:
    ...     for m in ms:
    ...         print(m)
    """

    def __init__(
        self,
        lines: Iterable[str],
        *,
        policy: ErrorPolicy = ErrorPolicy.YIELD,
        source: str = "<lines>",
        close_source: Optional[Callable[[], object]] = None,
    ) -> None:
        self.policy = policy
        self.source = source
        self.__lines = lines
        self.__close_source = close_source
        self.__results = self._generate()

    @classmethod
    def open(
        cls, path: str = PROC_MOUNTS, *, policy: ErrorPolicy = ErrorPolicy.YIELD
    ) -> "Mounts":
        """Open the mount table at `path`. Raises `OSError` if it cannot be
        opened.
        """
        # mount points are arbitrary bytes; don't fail on non UTF-8 names
        f = open(path, "r", encoding="utf-8", errors="surrogateescape")
        logger.debug(f"Opened mount table {path}")
        return cls(f, policy=policy, source=path, close_source=f.close)

    def __iter__(self) -> "Mounts":
        return self

    def __next__(self) -> MountResult:
        return next(self.__results)

    def __enter__(self) -> "Mounts":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        """Stop the iteration and release the source. Safe to call repeatedly."""
        self.__results.close()
        # an unstarted generator does not run its finally block
        self._release()

    def _release(self) -> None:
        if self.__close_source is not None:
            close_source, self.__close_source = self.__close_source, None
            close_source()
            logger.debug(f"Closed mount table {self.source}")

    def _handle(self, error: LineError) -> Optional[LineError]:
        if self.policy is ErrorPolicy.RAISE:
            raise error
        if self.policy is ErrorPolicy.SKIP:
            logger.warning(f"Skipping {self.source}, {error.describe()}")
            return None
        return error

    def _generate(self) -> Generator[MountResult, None, None]:
        lines = iter(self.__lines)
        line_number = 0
        try:
            while True:
                try:
                    line = next(lines)
                except StopIteration:
                    return
                except OSError as e:
                    # the source is unusable after a read failure
                    logger.error(f"Failed to read {self.source}: {e}")
                    error = self._handle(LineError(line_number + 1, e))
                    if error is not None:
                        yield error
                    return

                line_number += 1
                if not line.strip():
                    continue
                try:
                    yield parse_line(line)
                except MountParseError as e:
                    error = self._handle(
                        LineError(line_number, e, line=line.rstrip("\r\n"))
                    )
                    if error is not None:
                        yield error
        finally:
            self._release()


def mounts(
    path: str = PROC_MOUNTS, *, policy: ErrorPolicy = ErrorPolicy.YIELD
) -> Mounts:
    """Convenience function equivalent to `Mounts.open()`."""
    return Mounts.open(path, policy=policy)


def iter_mounts(lines: Iterable[str]) -> Iterator[Mount]:
    """Parse every line of `lines`, raising `LineError` on the first bad one."""
    for result in Mounts(lines, policy=ErrorPolicy.RAISE):
        # RAISE never produces errors as items
        assert isinstance(result, Mount)
        yield result
