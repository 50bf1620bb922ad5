# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from mountparse.parsing.escape import encode


@dataclass(frozen=True)
class Mount:
    """A mounted filesystem, see `man 5 fstab` and `man 8 mount`.

    Example:
    >>> m = Mount("/dev/sda1", "/mnt/disk", "ext4", ("ro", "nosuid"))
    >>> str(m)
    '/dev/sda1 on /mnt/disk type ext4 (ro,nosuid)'
    """

    # e.g. /dev/sda1
    device: str
    # e.g. /mnt/disk
    mount_point: str
    # e.g. ext4; never escape-decoded
    file_system_type: str
    # e.g. ("ro", "nosuid"); order is kept and duplicates are allowed
    options: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # accept any iterable, but store a tuple so the record stays immutable
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))

    def __str__(self) -> str:
        return "{} on {} type {} ({})".format(
            self.device,
            self.mount_point,
            self.file_system_type,
            ",".join(self.options),
        )

    def to_line(self) -> str:
        """Serialize back into the `/proc/mounts` line format.

        Raises `ValueError` if there are no options, since an empty options
        field cannot be parsed back.
        """
        if not self.options:
            raise ValueError(f"Cannot serialize {self} without options")
        return " ".join(
            [
                encode(self.device),
                encode(self.mount_point),
                self.file_system_type,
                ",".join(encode(o) for o in self.options),
                "0",
                "0",
            ]
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "device": self.device,
            "mount_point": self.mount_point,
            "file_system_type": self.file_system_type,
            "options": list(self.options),
        }
