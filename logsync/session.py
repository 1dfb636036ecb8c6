from __future__ import annotations

from collections.abc import Iterable
import logging
import os
from pathlib import Path

import littletable as lt
from rich.color_triplet import ColorTriplet

from .color_picker import ColorPicker
from .file_cache import FileCache, FileStatistics
from .merging import MergedLogModel, MergedView
from .timestamp_format import TimestampFormat, format_millis

logger = logging.getLogger(__name__)


class LogSyncSession:
    """
    Class holding the state of one log viewing session: the files that are open,
    which of them are currently shown, and the merged view of the shown files.
    Front ends (the command line, the interactive viewer) call these methods
    rather than using the FileCache or MergedLogModel directly.
    """
    def __init__(
            self,
            *,
            encoding: str | None = None,
            warm_cache: bool = False,
            timestamp_format: TimestampFormat | None = None,
    ):
        self.model = MergedLogModel(
            FileCache(encoding=encoding, warm_cache=warm_cache),
            ColorPicker(),
            timestamp_format,
        )
        # open file names, in the order opened, and whether each is shown
        self._open_files: dict[str, bool] = {}

    @property
    def file_cache(self) -> FileCache:
        return self.model.file_cache

    @property
    def color_picker(self) -> ColorPicker:
        return self.model.color_picker

    @property
    def view(self) -> MergedView:
        return self.model.view

    @property
    def open_files(self) -> list[str]:
        return list(self._open_files)

    @property
    def visible_files(self) -> list[str]:
        return [fname for fname, visible in self._open_files.items() if visible]

    @property
    def timestamp_format(self) -> TimestampFormat:
        return self.model.timestamp_format

    def _reload(self) -> MergedView:
        return self.model.reload(self.visible_files)

    @staticmethod
    def _existing_files(file_names: Iterable[str]) -> list[str]:
        existing = []
        for fname in file_names:
            if Path(fname).is_file():
                existing.append(fname)
            else:
                logger.warning("skipping %s: no such file", fname)
        return existing

    def open_set(self, file_names: Iterable[str]) -> MergedView:
        """Replace all open files with file_names, and merge them."""
        self.color_picker.reset()
        if self.file_cache.warm_cache:
            self.file_cache.reset()
        else:
            self.file_cache.purge()
        self.model.invalidate()

        self._open_files = {}
        for fname in self._existing_files(file_names):
            if fname not in self._open_files:
                self._open_files[fname] = True
                self.color_picker.get(fname)
        return self._reload()

    def add_to_set(self, file_names: Iterable[str]) -> MergedView:
        """Add file_names to the open files, and merge them with those already shown."""
        for fname in self._existing_files(file_names):
            if fname not in self._open_files and not self.file_cache.contains_file_name(fname):
                self._open_files[fname] = True
                self.color_picker.get(fname)
        return self._reload()

    def close_all(self) -> MergedView:
        self._open_files = {}
        view = self._reload()
        self.color_picker.reset()
        self.file_cache.purge()
        self.model.invalidate()
        return view

    def refresh(self) -> MergedView:
        return self.model.refresh()

    def set_timestamp_format(self, pattern: str, prefix_width: int | None = None) -> MergedView:
        """
        Use a new timestamp format for parsing log lines, and re-merge the shown files
        with it. An empty pattern leaves the current format in place. Raises ValueError
        if the pattern is not a valid timestamp format.
        """
        if not pattern:
            return self.view

        if prefix_width is None:
            prefix_width = self.model.timestamp_format.prefix_width
        self.model.timestamp_format = TimestampFormat(pattern, prefix_width)
        self.model.invalidate()
        return self._reload()

    def set_visible(self, file_name: str, visible: bool) -> MergedView:
        if file_name not in self._open_files:
            raise KeyError(f"{file_name} is not an open file")
        self._open_files[file_name] = visible
        return self._reload()

    def show_all(self) -> MergedView:
        self._open_files = dict.fromkeys(self._open_files, True)
        return self._reload()

    def hide_all(self) -> MergedView:
        self._open_files = dict.fromkeys(self._open_files, False)
        return self._reload()

    def color_table(self) -> dict[str, ColorTriplet]:
        return self.color_picker.color_table()

    def get_statistics(self) -> FileStatistics:
        return self.file_cache.get_statistics()

    def copy_text(self, indices: Iterable[int]) -> str:
        """Text of the selected merged lines, each followed by a line terminator."""
        return "".join(self.view.entries[i].text + os.linesep for i in sorted(indices))

    def export_combined_log(self, output_path: str | os.PathLike) -> int:
        """
        Write the text of every merged line to output_path, in merged order. Returns
        the number of lines written. Raises OSError if the file cannot be written.
        """
        entries = self.view.entries
        # text mode writes each "\n" as os.linesep
        with open(output_path, "w", encoding=self.file_cache.encoding) as outfile:
            outfile.writelines(f"{entry.text}\n" for entry in entries)
        logger.info("exported %d lines to %s", len(entries), output_path)
        return len(entries)

    def as_table(self) -> lt.Table:
        """Merged lines as a littletable Table with line, timestamp, file, and text fields."""
        merged_table = lt.Table()
        merged_table.insert_many(
            {
                "line": i,
                "timestamp": format_millis(entry.timestamp),
                "file": entry.tooltip,
                "text": entry.text,
            }
            for i, entry in enumerate(self.view.entries, start=1)
        )
        return merged_table

    def export_csv(self, output_path: str | os.PathLike) -> int:
        merged_table = self.as_table()
        merged_table.csv_export(str(output_path))
        logger.info("exported %d lines to %s", len(merged_table), output_path)
        return len(merged_table)
