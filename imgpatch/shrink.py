"""Cut trailing zero bytes off the end of regular files."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Sequence

CHUNK_SIZE = 2 * 1024 * 1024
PROG = "shrink"


class ShrinkError(Exception):
    """A file could not be examined or shrunk."""


def _check_regular(fd: int) -> int:
    try:
        info = os.fstat(fd)
    except OSError as exc:
        raise ShrinkError("Failed to stat file.") from exc
    if not stat.S_ISREG(info.st_mode):
        raise ShrinkError("Not a regular file.")
    if info.st_size < 1:
        raise ShrinkError("Nothing to shrink in an empty file.")
    return info.st_size


def _scan_trailing_zeros(fd: int, size: int) -> int:
    """Count trailing zeros, scanning whole chunks backwards from the end.

    Only full chunks are examined; a head shorter than one chunk is never
    looked at, so nothing is counted when no examined chunk holds data.
    """
    pos = size - CHUNK_SIZE
    while pos >= 0:
        try:
            chunk = os.pread(fd, CHUNK_SIZE, pos)
        except OSError as exc:
            raise ShrinkError("Failed to read file") from exc
        kept = len(chunk.rstrip(b"\0"))
        if kept:
            return size - (pos + kept)
        pos -= CHUNK_SIZE
    return 0


def _open(path: str | os.PathLike):
    try:
        return open(path, "r+b")
    except OSError as exc:
        raise ShrinkError("Failed to open file.") from exc


def trailing_zero_length(path: str | os.PathLike) -> int:
    """Return how many bytes shrinking would cut off the end of a file."""
    with _open(path) as handle:
        fd = handle.fileno()
        size = _check_regular(fd)
        return _scan_trailing_zeros(fd, size)


def _megabytes_note(shrunk_bytes: int, amount: int) -> str:
    if shrunk_bytes > 2 * 1024 * 1024:
        return f" ({amount // 1024 // 1024} MegaBytes)"
    return ""


def shrink(path: str | os.PathLike, exe: str = PROG, quiet: bool = False) -> bool:
    """Truncate trailing zero bytes from a file; return whether it shrank."""
    base = os.path.basename(os.fspath(path))
    if not quiet:
        print(f" - {exe}: Shrinking '{base}'")

    with _open(path) as handle:
        fd = handle.fileno()
        size = _check_regular(fd)
        try:
            last_byte = os.pread(fd, 1, size - 1)
        except OSError as exc:
            raise ShrinkError("Failed to read last byte of file.") from exc
        if len(last_byte) != 1:
            raise ShrinkError("Failed to read last byte of file.")
        if last_byte != b"\0":
            if not quiet:
                print(f" - {exe}: File is already shrunk.")
            return False

        new_size = size - _scan_trailing_zeros(fd, size)
        try:
            os.ftruncate(fd, new_size)
        except OSError as exc:
            raise ShrinkError(f"Failed to shrink {base}") from exc

    cut = size - new_size
    if cut < 1:
        if not quiet:
            print(f" - {exe}: Could not shrink.")
        return False

    if not quiet:
        print(f" * {exe}: Cut off {cut} Bytes{_megabytes_note(new_size, cut)}")
        print(f" * {exe}: Shrunk to {new_size} Bytes{_megabytes_note(new_size, new_size)}")
    return True


def main(argv: Sequence[str] | None = None) -> int:
    """Shrink every named file; return how many were shrunk."""
    args = list(sys.argv[1:] if argv is None else argv)
    quiet = any(arg in ("--quiet", "-q") for arg in args)
    files = [arg for arg in args if arg not in ("--quiet", "-q")]

    if not files:
        print(f" - Usage: {PROG} [--quiet|-q] <filename> [filename] ...", file=sys.stderr)
        return 0

    total = 0
    for name in files:
        try:
            total += shrink(name, PROG, quiet)
        except ShrinkError as exc:
            if not quiet:
                print(f" ! {PROG}: {exc}", file=sys.stderr)
    return total


if __name__ == "__main__":
    sys.exit(main())