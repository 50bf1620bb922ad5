# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""List mounted filesystems, similar to running `mount` with no arguments."""

import io
import json
import logging
import sys
from typing import Literal, Optional

import click

from mountparse._version import __version__
from mountparse.click import (
    log_folder_option,
    log_level_option,
    on_error_option,
    toml_config_option,
)
from mountparse.errors import LineError
from mountparse.log import init_logger
from mountparse.mounts import ErrorPolicy, Mounts, PROC_MOUNTS
from mountparse.schemas.mount import Mount
from typeguard import typechecked

LOGGER_NAME = "mountparse"

logger: logging.Logger  # initialization in main()


def format_mount(mount: Mount, fmt: str) -> str:
    if fmt == "json":
        # ensure_ascii escapes the surrogates left by undecodable bytes
        return json.dumps(mount.as_dict(), separators=(",", ":"))
    # undecodable bytes are shown as \xNN rather than failing on output
    return (
        str(mount)
        .encode("utf-8", "surrogateescape")
        .decode("utf-8", "backslashreplace")
    )


def open_mounts(path: str, policy: ErrorPolicy) -> Mounts:
    if path == "-":
        stdin = io.TextIOWrapper(
            click.get_binary_stream("stdin"),
            encoding="utf-8",
            errors="surrogateescape",
        )
        # detach rather than close so the process stdin stays open
        return Mounts(
            stdin, policy=policy, source="<stdin>", close_source=stdin.detach
        )
    try:
        return Mounts.open(path, policy=policy)
    except OSError as e:
        raise click.BadParameter(
            f"Could not open {path}: {e.strerror or e}", param_hint="'--path'"
        ) from e


@click.command(epilog=f"mountparse version: {__version__}")
@toml_config_option("mountparse")
@click.option(
    "--path",
    default=PROC_MOUNTS,
    show_default=True,
    help="The mount table to read. Pass '-' to read from stdin.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="'text' prints each mount like mount(8), 'json' prints one object per line.",
)
@on_error_option
@log_level_option
@log_folder_option
@click.version_option(__version__)
@typechecked
def main(
    path: str,
    fmt: str,
    on_error: ErrorPolicy,
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    log_folder: Optional[str],
) -> None:
    """Print the filesystems listed in a mount table."""
    global logger
    logger, handler = init_logger(
        logger_name=LOGGER_NAME,
        log_dir=log_folder,
        log_level=getattr(logging, log_level),
    )
    try:
        failures = print_mounts(path, fmt, on_error)
    finally:
        logger.removeHandler(handler)
        handler.close()

    if failures:
        sys.exit(1)


def print_mounts(path: str, fmt: str, policy: ErrorPolicy) -> int:
    """Print every mount in `path` and return the number of bad lines."""
    failures = 0
    with open_mounts(path, policy) as ms:
        try:
            for result in ms:
                if isinstance(result, LineError):
                    failures += 1
                    click.echo(f"{ms.source}: {result.describe()}", err=True)
                    continue
                click.echo(format_mount(result, fmt))
        except LineError as e:
            logger.debug("Stopping at the first malformed line", exc_info=True)
            raise click.ClickException(f"{ms.source}: {e.describe()}") from e

    if failures:
        logger.warning(f"{failures} line(s) of {ms.source} could not be parsed")
    return failures


if __name__ == "__main__":
    main()
