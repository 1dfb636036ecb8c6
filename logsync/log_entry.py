from __future__ import annotations

import functools

from rich.color_triplet import ColorTriplet

from .file_cache import FileCache
from .timestamp_format import TimestampFormat


@functools.total_ordering
class LogEntry:
    """
    Class representing one line of one log file. The text itself stays in the
    FileCache; an entry only holds the file index and line number, and reads the
    text when needed.

    Entries sort by timestamp, then by file name, then by line number, so that
    lines sharing a timestamp always come out in the same order. The timestamp is
    parsed from the text the first time it is needed, using the TimestampFormat
    that was current when the entry was created, and is kept from then on.
    """
    def __init__(
            self,
            file_cache: FileCache,
            source_index: int,
            line_number: int,
            timestamp_format: TimestampFormat,
    ):
        self._file_cache = file_cache
        self._source_index = source_index
        self._line_number = line_number
        self._timestamp_format = timestamp_format

    @property
    def source_index(self) -> int:
        return self._source_index

    @property
    def line_number(self) -> int:
        return self._line_number

    @functools.cached_property
    def timestamp(self) -> int:
        return self._timestamp_format.prefix_millis(self.text)

    @property
    def text(self) -> str:
        return self._file_cache.get_file_data(self._source_index, self._line_number)

    @property
    def color(self) -> ColorTriplet:
        return self._file_cache.get_file_color(self._source_index)

    @property
    def source_path(self) -> str:
        return self._file_cache.get_file_name(self._source_index)

    @property
    def tooltip(self) -> str:
        return f"{self.source_path}:{self._line_number + 1}"

    def sort_key(self) -> tuple[int, str, int]:
        return self.timestamp, self.source_path, self._line_number

    def compare(self, other: LogEntry) -> int:
        """Return -1, 0, or 1 as this entry sorts before, with, or after other."""
        self_key, other_key = self.sort_key(), other.sort_key()
        return (self_key > other_key) - (self_key < other_key)

    def __eq__(self, other):
        if not isinstance(other, LogEntry):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other):
        if not isinstance(other, LogEntry):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self):
        return hash((self.source_path, self._line_number))

    def __repr__(self):
        return f"{type(self).__name__}({self.tooltip!r})"

    def __str__(self):
        return self.text
