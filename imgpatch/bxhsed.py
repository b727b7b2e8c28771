"""Replace equal-length byte strings in place inside a file or block device."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable, Sequence

CODE_FAILURE = -1
USER_FAILURE = -2
MAX_MEMORY_PERCENT = 60
PROG = "bxhsed"

Replacement = tuple[bytes, bytes]


class ReplaceError(Exception):
    """An operation on the target failed (exit status -1)."""


class UsageError(Exception):
    """The request cannot be carried out as given (exit status -2)."""


def _to_bytes(value: str | bytes) -> bytes:
    return os.fsencode(value) if isinstance(value, str) else bytes(value)


def total_system_memory() -> int:
    """Return the total physical memory of the machine in bytes."""
    try:
        return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
    except (ValueError, OSError, AttributeError) as exc:
        raise ReplaceError("Error getting system info") from exc


def parse_replacements(args: Iterable[str | bytes], quiet: bool = False) -> list[Replacement]:
    """Turn 'from|to' arguments into (from, to) byte pairs, skipping bad ones."""
    pairs: list[Replacement] = []
    for arg in args:
        raw = _to_bytes(arg)
        shown = os.fsdecode(raw)
        if raw.count(b"|") != 1:
            if not quiet:
                print(f"Ignored argument: '{shown}'")
            continue
        first, _, second = raw.partition(b"|")
        if len(first) == len(second) and first != second:
            pairs.append((first, second))
        elif not quiet:
            print(f"Invalid argument: '{shown}'")
    return pairs


def _target_size(handle, resolved: str) -> int:
    try:
        info = os.lstat(resolved)
    except OSError as exc:
        raise ReplaceError(f"Failed to lstat {resolved}") from exc
    if stat.S_ISBLK(info.st_mode):
        try:
            size = handle.seek(0, os.SEEK_END)
            handle.seek(0)
        except OSError as exc:
            raise ReplaceError(f"Failed to get size of {resolved}") from exc
        return size
    if stat.S_ISREG(info.st_mode):
        return info.st_size
    raise UsageError(
        f"Error: '{resolved}' is neither a regular file nor a block device."
    )


def replace_binary(
    path: str | os.PathLike,
    replacements: Sequence[tuple[str | bytes, str | bytes]],
    quiet: bool = False,
) -> int:
    """Overwrite every occurrence of each 'from' with its 'to'; return the count.

    Matches are searched in the content as it was read, so one pair never
    sees what an earlier pair wrote.
    """
    pairs = [(_to_bytes(a), _to_bytes(b)) for a, b in replacements]
    if not pairs:
        raise UsageError("Nothing to replace.")
    try:
        resolved = os.path.realpath(path, strict=True)
    except OSError as exc:
        raise ReplaceError(f"Failed to resolve realpath for {os.fspath(path)}") from exc

    try:
        handle = open(resolved, "r+b")
    except OSError as exc:
        raise ReplaceError(f"Failed to open {resolved}") from exc

    with handle:
        size = _target_size(handle, resolved)
        longest = max(len(part) for pair in pairs for part in pair)
        if size < longest:
            raise ReplaceError(f"Invalid file size: {size}")
        if size > total_system_memory() // 100 * MAX_MEMORY_PERCENT:
            raise UsageError("Error: This file is too big to fit in your memory.")
        try:
            data = handle.read(size)
        except OSError as exc:
            raise ReplaceError(f"Failed to read {resolved}") from exc

        count = 0
        for source, target in pairs:
            if len(source) != len(target) or not source:
                print("Invalid replacement.")
                continue
            pos = data.find(source)
            while pos != -1:
                try:
                    handle.seek(pos)
                    handle.write(target)
                except OSError as exc:
                    raise ReplaceError(f"write() failed: {exc}") from exc
                count += 1
                pos = data.find(source, pos + len(source))
        try:
            handle.flush()
        except OSError as exc:
            raise ReplaceError(f"write() failed: {exc}") from exc

    if not quiet:
        print(f"Replaced {count} occurrences.")
    return count


def _usage_text(prog: str = PROG) -> str:
    """Build the usage message for the command named *prog*."""
    return "\n".join(
        (
            f"    Usage: {prog} [--quiet|-q] <filePath> <from|to> [from|to] ...",
            "    'from' and 'to' should have same the length in order to be replaced.",
            "",
            f"    Example: {prog} myfile.bin 'system|vendor'",
            "      All occurrences of 'system' will be replaced with 'vendor'",
        )
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the replacement count or a failure code."""
    args = list(sys.argv[1:] if argv is None else argv)
    quiet = any(arg in ("--quiet", "-q") for arg in args)
    args = [arg for arg in args if arg not in ("--quiet", "-q")]

    if len(args) < 2:
        print(_usage_text())
        return USER_FAILURE

    replacements = parse_replacements(args[1:], quiet)
    if not replacements:
        if not quiet:
            print("Nothing to replace.")
        return USER_FAILURE

    try:
        return replace_binary(args[0], replacements, quiet)
    except UsageError as exc:
        if not quiet:
            print(exc, file=sys.stderr)
        return USER_FAILURE
    except ReplaceError as exc:
        if not quiet:
            print(exc, file=sys.stderr)
        return CODE_FAILURE


if __name__ == "__main__":
    sys.exit(main())