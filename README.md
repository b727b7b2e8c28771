# imgpatch

Two small command-line tools for working on binary images such as boot or
partition dumps. Both change the file in place. They use `os.pread` and
related POSIX calls, so they run on POSIX systems.

## Installation

```
pip install .
```

This installs the `bxhsed` and `shrink` commands. The tests need pytest
(`pip install .[test]`).

## bxhsed

Replaces every occurrence of a byte string in a regular file or block device
with another byte string of the same length.

```
bxhsed [--quiet|-q] <filePath> <from|to> [from|to] ...
```

Each replacement is written as `from|to` and must contain exactly one `|`.
Arguments without exactly one `|` are reported as ignored. Arguments whose
halves differ in length or are equal are reported as invalid. If no usable
replacement remains, the command prints "Nothing to replace." and stops.
`--quiet` or `-q` may appear anywhere on the command line and suppresses
these messages and the error reports.

```
bxhsed myfile.bin 'system|vendor'
```

This replaces every `system` in `myfile.bin` with `vendor` and prints
`Replaced N occurrences.`

Notes on behaviour:

- The whole file is read into memory. A file larger than 60 % of the total
  physical memory is refused.
- A file shorter than the longest replacement string is refused.
- Matches are looked up in the content as it was read, so one pair never
  sees what an earlier pair wrote. Matches of one pair do not overlap.
- The path is resolved with symbolic links followed before it is opened.

`main()` returns the number of replacements, `-2` for a usage problem
(missing arguments, nothing to replace, file too large, not a regular file
or block device) or `-1` when the file could not be resolved, opened, read
or written. The command exits with that value, which the shell sees modulo
256.

From Python:

```python
from imgpatch.bxhsed import parse_replacements, replace_binary

pairs = parse_replacements(["system|vendor"], quiet=True)
count = replace_binary("myfile.bin", pairs, quiet=True)
```

`parse_replacements` accepts `str` or `bytes` arguments and returns a list
of `(from, to)` byte pairs. `replace_binary` accepts pairs of `str` or
`bytes`, returns the number of replacements, and raises:

- `UsageError` when there are no pairs, when the path is neither a regular
  file nor a block device, or when the file is too large for memory;
- `ReplaceError` when the path cannot be resolved, opened, read or written,
  or is shorter than the longest replacement string.

`total_system_memory()` returns the machine's physical memory in bytes.

## shrink

Removes trailing zero bytes from the end of regular files.

```
shrink [--quiet|-q] <filename> [filename] ...
```

A file that already ends with a non-zero byte is reported as already shrunk
and left alone. Otherwise the file is scanned backwards from its end in
whole chunks of 2 MiB, and cut back to just after the last non-zero byte
found in those chunks. Only whole chunks are examined: the part at the start
of the file that is shorter than one chunk is never looked at. A file smaller
than 2 MiB is therefore never shrunk, and neither is a file whose examined
chunks are all zero; both are reported with "Could not shrink."

Errors for one file (cannot open, not a regular file, empty file, read or
truncate failure) are printed to standard error and the next file is
processed. Run without file names, the command prints its usage and returns
0. `main()` returns the number of files that were shrunk, and the command
exits with that value.

From Python:

```python
from imgpatch.shrink import shrink, trailing_zero_length

print(trailing_zero_length("image.img"))
shrink("image.img", "shrink", quiet=True)
```

`trailing_zero_length(path)` returns how many bytes shrinking would cut off,
using the same chunked scan. `shrink(path, exe, quiet)` returns `True` if the
file was truncated and `False` if it was already shrunk or could not be
shrunk; `exe` is the name shown in its messages. Both raise `ShrinkError`
when the file cannot be opened, is not a regular file, is empty or cannot be
read, and `shrink` raises it too when truncation fails.