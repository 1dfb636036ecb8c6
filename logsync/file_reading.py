from __future__ import annotations

import abc
import gzip
import zlib

# what reading a log file can raise: missing or unreadable files, undecodable
# text, and truncated or corrupt gzip data
READ_ERRORS = (OSError, UnicodeDecodeError, EOFError, zlib.error)


class FileReader:
    """
    Base class for reading the lines of a log file. Use get_reader() to select
    the subclass that can read a given file name, and use the reader as a context
    manager so that the underlying file is closed even if reading fails part way.

        with FileReader.get_reader("app.log", "utf-8") as reader:
            lines = reader.read_lines()
    """
    @classmethod
    def get_reader(cls, name: str, encoding: str) -> FileReader:
        for subcls in cls.__subclasses__():
            if subcls is TextFileReader:
                continue
            if subcls._can_read(name):
                return subcls(name, encoding)
        return TextFileReader(name, encoding)

    @classmethod
    @abc.abstractmethod
    def _can_read(cls, fname: str) -> bool:
        """Override in subclasses"""

    @abc.abstractmethod
    def _close_reader(self):
        """Override in subclasses"""

    def __init__(self, file_name: str, encoding: str):
        self.file_name = file_name
        self.encoding = encoding
        self._iter = iter(())

    def __iter__(self):
        return self

    def __next__(self) -> str:
        try:
            return next(self._iter)
        except StopIteration:
            self._close_reader()
            raise

    def __enter__(self) -> FileReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self._close_reader()

    def read_lines(self) -> list[str]:
        # line terminators are not part of the log text
        return [line.rstrip("\r\n") for line in self]


class TextFileReader(FileReader):
    @classmethod
    def _can_read(cls, fname: str) -> bool:
        return True

    def __init__(self, fname: str, encoding: str):
        super().__init__(fname, encoding)
        self._close_obj = open(self.file_name, encoding=self.encoding)
        self._iter = iter(self._close_obj)

    def _close_reader(self):
        self._close_obj.close()


class GzipFileReader(FileReader):
    @classmethod
    def _can_read(cls, fname: str) -> bool:
        return fname.endswith(".gz")

    def __init__(self, fname: str, encoding: str):
        super().__init__(fname, encoding)
        self._close_obj = gzip.open(self.file_name, "rt", encoding=self.encoding)
        self._iter = iter(self._close_obj)

    def _close_reader(self):
        self._close_obj.close()
