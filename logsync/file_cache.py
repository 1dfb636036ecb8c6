from __future__ import annotations

from dataclasses import dataclass
import logging
import sys
from typing import NamedTuple

from rich.color_triplet import ColorTriplet

from .file_reading import READ_ERRORS, FileReader

logger = logging.getLogger(__name__)


class FileStatistics(NamedTuple):
    file_count: int
    total_lines: int
    total_bytes: int


@dataclass
class CachedSource:
    file_name: str
    lines: list[str]
    color: ColorTriplet


class FileCache:
    """
    Class to load and hold the lines of each log file being merged. Files are
    registered by their exact path string, and are referred to afterward by the
    index returned from add_file().

    Every file read since the last purge() is also kept in a content cache keyed
    by file name. With warm_cache=True, add_file() serves a previously read file
    from this cache instead of reading it again (after reset(), for instance);
    refresh() always goes back to disk.
    """
    def __init__(self, encoding: str | None = None, warm_cache: bool = False):
        self.encoding = encoding or sys.getfilesystemencoding()
        self.warm_cache = warm_cache
        self._sources: list[CachedSource] = []
        self._index_by_name: dict[str, int] = {}
        self._content_cache: dict[str, list[str]] = {}

    def _read_file(self, file_name: str) -> list[str]:
        with FileReader.get_reader(file_name, self.encoding) as reader:
            return reader.read_lines()

    def add_file(self, file_name: str, color: ColorTriplet) -> int | None:
        """
        Register file_name and return its index, reading its lines if needed.
        Returns None if the file cannot be read; nothing is registered in that case.
        """
        if file_name in self._index_by_name:
            return self._index_by_name[file_name]

        if self.warm_cache and file_name in self._content_cache:
            lines = self._content_cache[file_name]
        else:
            try:
                lines = self._read_file(file_name)
            except READ_ERRORS as exc:
                logger.warning("cannot read %s: %s", file_name, exc)
                return None

        self._sources.append(CachedSource(file_name, lines, color))
        self._content_cache[file_name] = lines
        index = len(self._sources) - 1
        self._index_by_name[file_name] = index
        logger.debug("loaded %s (%d lines) as file %d", file_name, len(lines), index)
        return index

    def contains_file_name(self, file_name: str) -> bool:
        return file_name in self._index_by_name

    def get_file_color(self, index: int) -> ColorTriplet:
        return self._sources[index].color

    def get_file_name(self, index: int) -> str:
        return self._sources[index].file_name

    def get_file_data(self, index: int, line_number: int) -> str:
        return self._sources[index].lines[line_number]

    def get_file_num_lines(self, index: int) -> int:
        return len(self._sources[index].lines)

    def get_statistics(self) -> FileStatistics:
        return FileStatistics(
            file_count=len(self._content_cache),
            total_lines=sum(len(lines) for lines in self._content_cache.values()),
            total_bytes=sum(len(line) for lines in self._content_cache.values() for line in lines),
        )

    def refresh(self) -> None:
        """
        Re-read every registered file from disk. A file that can no longer be read
        is left with no lines. Cached content of files that are no longer registered
        is dropped, so that it is not served again later.
        """
        self._content_cache = {
            fname: lines for fname, lines in self._content_cache.items()
            if fname in self._index_by_name
        }
        for source in self._sources:
            try:
                lines = self._read_file(source.file_name)
            except READ_ERRORS as exc:
                logger.warning("cannot re-read %s: %s", source.file_name, exc)
                lines = []
            source.lines = lines
            self._content_cache[source.file_name] = lines

    def reset(self) -> None:
        # registered files only - content cache is kept
        self._sources = []
        self._index_by_name = {}

    def purge(self) -> None:
        self.reset()
        self._content_cache = {}

    @property
    def file_names(self) -> list[str]:
        return [source.file_name for source in self._sources]

    def __len__(self) -> int:
        return len(self._sources)
