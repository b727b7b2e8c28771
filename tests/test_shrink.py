import pytest

from imgpatch.shrink import CHUNK_SIZE, ShrinkError, main, shrink, trailing_zero_length


def _padded(tmp_path, name, payload, total):
    path = tmp_path / name
    with open(path, "wb") as handle:
        handle.write(payload)
        handle.truncate(total)
    return path


def test_trailing_zero_length_large(tmp_path):
    path = _padded(tmp_path, "big.img", b"\x01" * 10, 3 * CHUNK_SIZE)
    assert trailing_zero_length(path) == 3 * CHUNK_SIZE - 10


def test_shrink_large_file(tmp_path):
    path = _padded(tmp_path, "big.img", b"\x01" * 10, 3 * CHUNK_SIZE)
    assert shrink(path, quiet=True) is True
    assert path.read_bytes() == b"\x01" * 10


def test_shrink_keeps_inner_zeros(tmp_path):
    payload = b"ab\0\0cd"
    path = _padded(tmp_path, "f.img", payload, 2 * CHUNK_SIZE)
    assert shrink(path, quiet=True) is True
    assert path.read_bytes() == payload


def test_shrink_is_idempotent(tmp_path):
    path = _padded(tmp_path, "f.img", b"xyz", 2 * CHUNK_SIZE)
    assert shrink(path, quiet=True) is True
    assert shrink(path, quiet=True) is False
    assert path.read_bytes() == b"xyz"
    assert trailing_zero_length(path) == 0


def test_already_shrunk(tmp_path, capsys):
    path = tmp_path / "f"
    path.write_bytes(b"\0\0data")
    assert shrink(path) is False
    assert "File is already shrunk." in capsys.readouterr().out
    assert path.read_bytes() == b"\0\0data"


def test_small_file_is_not_scanned(tmp_path, capsys):
    path = tmp_path / "f"
    path.write_bytes(b"ab\0\0")
    assert shrink(path) is False
    assert "Could not shrink." in capsys.readouterr().out
    assert path.read_bytes() == b"ab\0\0"


def test_report_mentions_sizes(tmp_path, capsys):
    path = _padded(tmp_path, "f.img", b"q" * 5, 2 * CHUNK_SIZE)
    shrink(path, exe="tool")
    out = capsys.readouterr().out
    assert " - tool: Shrinking 'f.img'" in out
    assert f" * tool: Cut off {2 * CHUNK_SIZE - 5} Bytes" in out
    assert " * tool: Shrunk to 5 Bytes" in out


def test_empty_file(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")
    with pytest.raises(ShrinkError, match="empty file"):
        shrink(path, quiet=True)


def test_missing_file(tmp_path):
    with pytest.raises(ShrinkError, match="Failed to open file."):
        shrink(tmp_path / "missing", quiet=True)


def test_directory(tmp_path):
    with pytest.raises(ShrinkError):
        trailing_zero_length(tmp_path)


def test_main_counts_shrunk_files(tmp_path):
    first = _padded(tmp_path, "a.img", b"a", 2 * CHUNK_SIZE)
    second = tmp_path / "b.img"
    second.write_bytes(b"done")
    missing = tmp_path / "missing"
    assert main(["-q", str(first), str(second), str(missing)]) == 1
    assert first.read_bytes() == b"a"


def test_main_usage(capsys):
    assert main([]) == 0
    assert "Usage:" in capsys.readouterr().err


def test_main_reports_errors(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 0
    assert " ! shrink: Failed to open file." in capsys.readouterr().err