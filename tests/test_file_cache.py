import gzip

import pytest

from logsync.color_picker import PALETTE
from logsync.file_cache import FileCache, FileStatistics

from .util import write_log

RED = PALETTE[1]
BLUE = PALETTE[9]


@pytest.fixture
def log_a(tmp_path):
    return write_log(tmp_path / "a.log", ["Jan 01 10:00:00 hello", "Jan 01 10:00:02 world"])


@pytest.fixture
def log_b(tmp_path):
    return write_log(tmp_path / "b.log", ["Jan 01 10:00:01 middle line"])


def test_add_file_reads_lines(log_a):
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(log_a, RED)

    assert index == 0
    assert cache.contains_file_name(log_a)
    assert cache.get_file_name(index) == log_a
    assert cache.get_file_color(index) == RED
    assert cache.get_file_num_lines(index) == 2
    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 hello"
    assert cache.get_file_data(index, 1) == "Jan 01 10:00:02 world"


def test_add_file_is_idempotent(log_a, log_b, monkeypatch):
    cache = FileCache(encoding="utf-8")
    assert cache.add_file(log_a, RED) == 0
    assert cache.add_file(log_b, BLUE) == 1

    reads = []
    monkeypatch.setattr(cache, "_read_file", lambda fname: reads.append(fname) or [])

    # already registered - same index, original color, no read
    assert cache.add_file(log_a, BLUE) == 0
    assert cache.get_file_color(0) == RED
    assert reads == []
    assert len(cache) == 2


def test_missing_file_is_not_registered(tmp_path):
    cache = FileCache(encoding="utf-8")
    missing = str(tmp_path / "missing.log")

    assert cache.add_file(missing, RED) is None
    assert not cache.contains_file_name(missing)
    assert len(cache) == 0
    assert cache.get_statistics() == FileStatistics(0, 0, 0)


def test_undecodable_file_is_not_registered(tmp_path):
    bad = tmp_path / "bad.log"
    bad.write_bytes(b"Jan 01 10:00:00 \xff\xfe\xfa bad bytes\n")
    cache = FileCache(encoding="utf-8")
    assert cache.add_file(str(bad), RED) is None
    assert len(cache) == 0


def test_path_identity_is_exact_string(tmp_path, log_a):
    cache = FileCache(encoding="utf-8")
    cache.add_file(log_a, RED)
    other_spelling = f"{tmp_path}/./a.log"
    assert not cache.contains_file_name(other_spelling)
    assert cache.add_file(other_spelling, BLUE) == 1


def test_line_terminators_are_stripped(tmp_path):
    crlf = tmp_path / "crlf.log"
    crlf.write_bytes(b"Jan 01 10:00:00 first line\r\nJan 01 10:00:01 second line\r\n")
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(str(crlf), RED)
    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 first line"
    assert cache.get_file_data(index, 1) == "Jan 01 10:00:01 second line"


def test_gzip_file(tmp_path):
    gz_path = tmp_path / "rotated.log.gz"
    with gzip.open(gz_path, "wt", encoding="utf-8") as gz_file:
        gz_file.write("Jan 01 10:00:00 compressed line\n")
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(str(gz_path), RED)
    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 compressed line"


def test_truncated_gzip_file_is_not_found(tmp_path, log_b):
    gz_path = tmp_path / "rotated.log.gz"
    with gzip.open(gz_path, "wt", encoding="utf-8") as gz_file:
        gz_file.write("Jan 01 10:00:00 compressed line\n")
    gz_path.write_bytes(gz_path.read_bytes()[:-12])

    cache = FileCache(encoding="utf-8")
    assert cache.add_file(str(gz_path), RED) is None
    assert not cache.contains_file_name(str(gz_path))
    assert cache.add_file(log_b, BLUE) == 0


def test_corrupt_gzip_data_is_not_found(tmp_path):
    gz_path = tmp_path / "rotated.log.gz"
    data = bytearray(gzip.compress(b"Jan 01 10:00:00 compressed line\n" * 50))
    # overwrite the deflate stream after the 10-byte gzip header
    data[10:30] = b"\xff" * 20
    gz_path.write_bytes(bytes(data))

    cache = FileCache(encoding="utf-8")
    assert cache.add_file(str(gz_path), RED) is None


def test_empty_file(tmp_path):
    empty = write_log(tmp_path / "empty.log", [])
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(empty, RED)
    assert index == 0
    assert cache.get_file_num_lines(index) == 0


def test_invalid_index_is_an_error(log_a):
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(log_a, RED)
    with pytest.raises(IndexError):
        cache.get_file_data(index, 2)
    with pytest.raises(IndexError):
        cache.get_file_name(index + 1)


def test_statistics(log_a, log_b):
    cache = FileCache(encoding="utf-8")
    cache.add_file(log_a, RED)
    cache.add_file(log_b, BLUE)
    assert cache.get_statistics() == FileStatistics(
        file_count=2,
        total_lines=3,
        total_bytes=len("Jan 01 10:00:00 hello") + len("Jan 01 10:00:02 world") + len("Jan 01 10:00:01 middle line"),
    )


def test_purge_clears_everything(log_a, log_b):
    cache = FileCache(encoding="utf-8")
    cache.add_file(log_a, RED)
    cache.add_file(log_b, BLUE)

    cache.purge()

    assert len(cache) == 0
    assert not cache.contains_file_name(log_a)
    assert cache.get_statistics() == FileStatistics(file_count=0, total_lines=0, total_bytes=0)


def test_reset_keeps_content_cache(log_a):
    cache = FileCache(encoding="utf-8")
    cache.add_file(log_a, RED)

    cache.reset()

    assert len(cache) == 0
    assert not cache.contains_file_name(log_a)
    assert cache.get_statistics().file_count == 1


def test_cold_cache_rereads_after_reset(tmp_path):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 original"])
    cache = FileCache(encoding="utf-8")
    cache.add_file(fname, RED)

    cache.reset()
    write_log(log_path, ["Jan 01 10:00:00 changed"])
    index = cache.add_file(fname, RED)

    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 changed"


def test_warm_cache_reuses_content_after_reset(tmp_path):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 original"])
    cache = FileCache(encoding="utf-8", warm_cache=True)
    cache.add_file(fname, RED)

    cache.reset()
    write_log(log_path, ["Jan 01 10:00:00 changed"])
    index = cache.add_file(fname, BLUE)

    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 original"
    assert cache.get_file_color(index) == BLUE

    # refresh always goes back to disk
    cache.refresh()
    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 changed"


def test_warm_cache_not_used_after_purge(tmp_path):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 original"])
    cache = FileCache(encoding="utf-8", warm_cache=True)
    cache.add_file(fname, RED)

    cache.purge()
    write_log(log_path, ["Jan 01 10:00:00 changed"])
    index = cache.add_file(fname, RED)

    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 changed"


def test_refresh_rereads_files(tmp_path, log_b):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 hello"])
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(fname, RED)
    cache.add_file(log_b, BLUE)

    write_log(log_path, ["Jan 01 10:00:00 hello", "Jan 01 10:00:05 appended"])
    cache.refresh()

    assert cache.get_file_num_lines(index) == 2
    assert cache.get_file_data(index, 1) == "Jan 01 10:00:05 appended"
    assert cache.get_statistics().total_lines == 3


def test_refresh_isolates_failures(tmp_path, log_b):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 hello"])
    cache = FileCache(encoding="utf-8")
    index_a = cache.add_file(fname, RED)
    index_b = cache.add_file(log_b, BLUE)

    log_path.unlink()
    cache.refresh()

    assert cache.get_file_num_lines(index_a) == 0
    assert cache.contains_file_name(fname)
    assert cache.get_file_num_lines(index_b) == 1
    assert cache.get_statistics() == FileStatistics(2, 1, len("Jan 01 10:00:01 middle line"))


def test_refresh_of_truncated_file(tmp_path):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 hello"])
    cache = FileCache(encoding="utf-8")
    index = cache.add_file(fname, RED)

    log_path.write_bytes(b"")
    cache.refresh()

    assert cache.get_file_num_lines(index) == 0


def test_refresh_of_gzip_file_truncated_on_disk(tmp_path, log_b):
    gz_path = tmp_path / "rotated.log.gz"
    with gzip.open(gz_path, "wt", encoding="utf-8") as gz_file:
        gz_file.write("Jan 01 10:00:00 compressed line\n")
    cache = FileCache(encoding="utf-8")
    index_gz = cache.add_file(str(gz_path), RED)
    index_b = cache.add_file(log_b, BLUE)

    gz_path.write_bytes(gz_path.read_bytes()[:-12])
    cache.refresh()

    assert cache.get_file_num_lines(index_gz) == 0
    assert cache.get_file_num_lines(index_b) == 1


def test_refresh_drops_content_of_unregistered_files(tmp_path, log_b):
    log_path = tmp_path / "a.log"
    fname = write_log(log_path, ["Jan 01 10:00:00 original"])
    cache = FileCache(encoding="utf-8", warm_cache=True)
    cache.add_file(fname, RED)

    cache.reset()
    cache.add_file(log_b, BLUE)
    write_log(log_path, ["Jan 01 10:00:00 changed"])
    cache.refresh()

    assert cache.get_statistics().file_count == 1
    index = cache.add_file(fname, RED)
    assert cache.get_file_data(index, 0) == "Jan 01 10:00:00 changed"
