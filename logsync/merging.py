from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
import logging
import time
from typing import NamedTuple

from .color_picker import ColorPicker
from .file_cache import FileCache
from .log_entry import LogEntry
from .timestamp_format import TimestampFormat

logger = logging.getLogger(__name__)


class MergedView(NamedTuple):
    entries: tuple[LogEntry, ...] = ()
    source_paths: tuple[str, ...] = ()


ViewListener = Callable[[MergedView], None]


class MergedLogModel:
    """
    Class to merge the lines of a list of log files into a single sequence of
    LogEntry's, ordered by timestamp.

    The model owns the FileCache, ColorPicker, and TimestampFormat it merges with.
    reload() takes the list of files to be shown; if it is the same list as the
    last call, the current view is announced again without rebuilding it.
    Listeners added with add_listener() are called with the view each time it is
    published or announced.
    """
    def __init__(
            self,
            file_cache: FileCache | None = None,
            color_picker: ColorPicker | None = None,
            timestamp_format: TimestampFormat | None = None,
    ):
        self.file_cache = file_cache if file_cache is not None else FileCache()
        self.color_picker = color_picker if color_picker is not None else ColorPicker()
        self.timestamp_format = timestamp_format if timestamp_format is not None else TimestampFormat()
        self._last_file_names: list[str] | None = None
        self._view = MergedView()
        self._listeners: list[ViewListener] = []

    @property
    def view(self) -> MergedView:
        return self._view

    @property
    def file_names(self) -> list[str]:
        return list(self._last_file_names or [])

    def add_listener(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ViewListener) -> None:
        self._listeners.remove(listener)

    def _announce(self) -> None:
        for listener in self._listeners:
            listener(self._view)

    def invalidate(self) -> None:
        """Forget the last list of files, so that the next reload() rebuilds the view."""
        self._last_file_names = None

    def reload(self, file_names: Sequence[str]) -> MergedView:
        file_names = list(file_names)
        if file_names == self._last_file_names:
            logger.debug("file list unchanged, keeping current view")
            self._announce()
            return self._view

        self._last_file_names = file_names
        return self._rebuild()

    def refresh(self) -> MergedView:
        """Re-read all files from disk and rebuild the view, even if no file names changed."""
        self.file_cache.refresh()
        return self._rebuild()

    def _load_entries(self, file_names: Iterable[str]) -> Iterator[LogEntry]:
        # dict.fromkeys drops duplicate names, keeping the first of each
        for file_name in dict.fromkeys(file_names):
            color = self.color_picker.get(file_name)
            file_index = self.file_cache.add_file(file_name, color)
            if file_index is None:
                continue

            for line_number in range(self.file_cache.get_file_num_lines(file_index)):
                yield LogEntry(self.file_cache, file_index, line_number, self.timestamp_format)

    def _rebuild(self) -> MergedView:
        file_names = self._last_file_names or []
        start = time.perf_counter()

        entries = sorted(self._load_entries(file_names), key=LogEntry.sort_key)
        self._view = MergedView(tuple(entries), tuple(file_names))

        logger.debug(
            "merged %d lines from %d files in %.3f seconds",
            len(entries), len(set(file_names)), time.perf_counter() - start
        )
        self._announce()
        return self._view

    def __len__(self) -> int:
        return len(self._view.entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._view.entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self._view.entries[index]
