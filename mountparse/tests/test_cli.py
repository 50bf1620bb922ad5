# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import json
from pathlib import Path
from typing import Sequence

import pytest
from click.testing import CliRunner

from mountparse.cli.mountparse import main
from typeguard import typechecked

DATA_DIR = Path(__file__).parent / "data"
SAMPLE_MOUNTS = str(DATA_DIR / "sample-proc-mounts.txt")
MALFORMED_MOUNTS = str(DATA_DIR / "malformed-proc-mounts.txt")

# keep tests independent of the config file on the machine running them
BASE_ARGS = ["--config", "/dev/null"]


def test_text_output() -> None:
    r = CliRunner().invoke(main, BASE_ARGS + ["--path", SAMPLE_MOUNTS])

    assert r.exit_code == 0
    lines = r.stdout.splitlines()
    assert len(lines) == 6
    assert lines[0] == "sysfs on /sys type sysfs (rw,nosuid,nodev,noexec,relatime)"
    assert lines[4] == "tmpfs on /tmp/x b type tmpfs (rw,relatime,inode64)"


def test_json_output() -> None:
    r = CliRunner().invoke(
        main, BASE_ARGS + ["--path", SAMPLE_MOUNTS, "--format", "json"]
    )

    assert r.exit_code == 0
    records = [json.loads(line) for line in r.stdout.splitlines()]
    assert records[3] == {
        "device": "tmpfs",
        "mount_point": "/dev/shm",
        "file_system_type": "tmpfs",
        "options": ["rw", "nosuid", "nodev", "inode64"],
    }


def test_stdin() -> None:
    r = CliRunner().invoke(
        main, BASE_ARGS + ["--path", "-"], input="proc /proc proc rw 0 0\n"
    )

    assert r.exit_code == 0
    assert r.stdout == "proc on /proc type proc (rw)\n"


def test_undecodable_mount_point(tmp_path: Path) -> None:
    table = tmp_path / "mounts"
    table.write_bytes(b"/dev/sda1 /mnt/caf\xe9 ext4 rw 0 0\n")

    r = CliRunner().invoke(main, BASE_ARGS + ["--path", str(table)])

    assert r.exit_code == 0
    assert r.stdout == "/dev/sda1 on /mnt/caf\\xe9 type ext4 (rw)\n"


def test_undecodable_stdin() -> None:
    r = CliRunner().invoke(
        main,
        BASE_ARGS + ["--path", "-"],
        input=b"/dev/sda1 /mnt/caf\xe9 ext4 rw 0 0\n",
    )

    assert r.exit_code == 0
    assert r.stdout == "/dev/sda1 on /mnt/caf\\xe9 type ext4 (rw)\n"


def test_undecodable_mount_point_json() -> None:
    r = CliRunner().invoke(
        main,
        BASE_ARGS + ["--path", "-", "--format", "json"],
        input=b"/dev/sda1 /mnt/caf\xe9 ext4 rw 0 0\n",
    )

    assert r.exit_code == 0
    assert '"mount_point":"/mnt/caf\\udce9"' in r.stdout


@pytest.mark.parametrize(
    "args, expected_exit_code, expected_stdout_lines",
    [
        ([], 1, 2),
        (["--on-error", "skip"], 0, 2),
        (["--on-error", "raise"], 1, 1),
    ],
)
@typechecked
def test_malformed_lines(
    args: Sequence[str], expected_exit_code: int, expected_stdout_lines: int
) -> None:
    r = CliRunner().invoke(main, BASE_ARGS + ["--path", MALFORMED_MOUNTS, *args])

    assert r.exit_code == expected_exit_code
    assert len(r.stdout.splitlines()) == expected_stdout_lines


def test_malformed_lines_are_reported() -> None:
    r = CliRunner().invoke(main, BASE_ARGS + ["--path", MALFORMED_MOUNTS])

    assert f"{MALFORMED_MOUNTS}: line 2: Unexpected end of line" in r.stderr
    assert f"{MALFORMED_MOUNTS}: line 3: Unexpected trailing input" in r.stderr
    assert f"{MALFORMED_MOUNTS}: line 5: Unrecognized escape sequence" in r.stderr


def test_missing_path(tmp_path: Path) -> None:
    r = CliRunner().invoke(
        main, BASE_ARGS + ["--path", str(tmp_path / "does_not_exist")]
    )

    assert r.exit_code == 2
    assert "Could not open" in r.stderr


def test_config_file(tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text(f'[mountparse]\npath = "{SAMPLE_MOUNTS}"\nfmt = "json"\n')

    r = CliRunner().invoke(main, ["--config", str(config)])

    assert r.exit_code == 0
    assert json.loads(r.stdout.splitlines()[0])["device"] == "sysfs"
