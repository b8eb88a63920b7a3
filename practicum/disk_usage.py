"""Report total, free and available space on the disk holding a path."""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Sequence
from dataclasses import dataclass

BYTES_IN_GB = 1024 * 1024 * 1024


@dataclass(frozen=True)
class DiskUsage:
    """Disk space in bytes."""

    total: int
    free: int
    available: int

    @property
    def used(self) -> int:
        return self.total - self.free


def get_disk_usage(path: str | os.PathLike[str]) -> DiskUsage:
    """Return the total, free and user-available space for the disk holding ``path``."""
    if hasattr(os, "statvfs"):
        st = os.statvfs(path)
        return DiskUsage(
            total=st.f_blocks * st.f_frsize,
            free=st.f_bfree * st.f_frsize,
            available=st.f_bavail * st.f_frsize,
        )
    usage = shutil.disk_usage(path)
    return DiskUsage(total=usage.total, free=usage.free, available=usage.free)


def format_report(path: str, usage: DiskUsage) -> str:
    """Render the usage in gigabytes."""
    total = usage.total / BYTES_IN_GB
    free = usage.free / BYTES_IN_GB
    available = usage.available / BYTES_IN_GB
    return "\n".join(
        (
            f"Disk Usage for Path: {path}",
            f"Total Space: {total:.2f} GB",
            f"Free Space: {free:.2f} GB",
            f"Available Space: {available:.2f} GB",
            f"Used Space: {total - free:.2f} GB",
        )
    )


def _default_path() -> str:
    return os.path.abspath(os.sep)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    path = args[0] if args else _default_path()
    try:
        usage = get_disk_usage(path)
    except OSError as exc:
        print(f"Error: failed to get disk usage: {exc}")
        return 1
    print(format_report(path, usage))
    return 0


if __name__ == "__main__":
    sys.exit(main())