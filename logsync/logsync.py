#
# logsync.py
#
# Utility for viewing multiple log files merged into a single, color-coded,
# time-ordered log.
#

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

from .file_reading import READ_ERRORS, FileReader
from .session import LogSyncSession
from .timestamp_format import DEFAULT_PATTERN, DEFAULT_PREFIX_WIDTH, TimestampFormat, detect_format

logger = logging.getLogger(__name__)


def make_argument_parser():
    epilog_notes = """
    Each line of each log file is expected to start with a timestamp. Timestamps are
    parsed from the first 21 characters of the line (see --prefix-width) using a
    strptime-style format, by default "%b %d %H:%M:%S" (such as "Jan 02 15:04:05").
    Lines without a timestamp sort ahead of all timestamped lines. Lines with the
    same timestamp are ordered by file name, and then by line number.

    Use "--timestamp-format auto" to pick a format based on the first line of the
    first file.
    """

    parser = argparse.ArgumentParser(prog="logsync", epilog=epilog_notes)
    parser.add_argument("files", nargs="+", help="log files to be merged")
    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="show merged logs using interactive TUI browser"
    )
    parser.add_argument("--output", "-o", help="save merged log text to file ('-' for stdout)")
    parser.add_argument("--csv", "-csv", help="save merged logs to CSV file")
    parser.add_argument("--table", action="store_true", help="show merged logs as a table")
    parser.add_argument(
        "--timestamp-format", "-t",
        default=DEFAULT_PATTERN,
        help="strptime format of the leading log timestamps, or 'auto' (default: %(default)r)"
    )
    parser.add_argument(
        "--prefix-width",
        type=int,
        default=DEFAULT_PREFIX_WIDTH,
        help="number of leading characters of each line to parse for a timestamp (default: %(default)s)"
    )
    parser.add_argument(
        "--encoding", "-enc",
        type=str,
        default=sys.getfilesystemencoding(),
        help="encoding to use when reading log files (defaults to the system default encoding)"
    )
    parser.add_argument(
        "--warm-cache",
        action="store_true",
        help="reuse file contents already read, rather than re-reading files when the file set changes"
    )
    parser.add_argument("--stats", action="store_true", help="print file statistics after merging")
    parser.add_argument("--verbose", "-v", action="store_true", help="show debug logging")

    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


class LogSyncApplication:
    def __init__(self, config: argparse.Namespace):
        self.config = config
        self.fnames = config.files
        self.interactive = config.interactive
        self.save_to_file = config.output
        self.save_to_csv = config.csv
        self.table_output = config.table
        self.console = Console()

        if config.timestamp_format == "auto":
            timestamp_format = self._detect_timestamp_format()
        else:
            timestamp_format = TimestampFormat(config.timestamp_format, config.prefix_width)

        self.session = LogSyncSession(
            encoding=config.encoding,
            warm_cache=config.warm_cache,
            timestamp_format=timestamp_format,
        )

    def _detect_timestamp_format(self) -> TimestampFormat:
        for fname in self.fnames:
            try:
                with FileReader.get_reader(fname, self.config.encoding) as reader:
                    timestamp_format = detect_format(reader)
            except READ_ERRORS as exc:
                logger.warning("cannot read %s: %s", fname, exc)
                continue
            if timestamp_format is not None:
                logger.info("using timestamp format %r", timestamp_format.pattern)
                return timestamp_format

        logger.warning("no known timestamp format found, using %r", DEFAULT_PATTERN)
        return TimestampFormat(DEFAULT_PATTERN, self.config.prefix_width)

    def run(self) -> int:
        self.session.open_set(self.fnames)

        status = 0
        if self.interactive:
            self._display_merged_lines_interactively()
        elif self.save_to_file or self.save_to_csv:
            status = self._save_merged_lines()
        elif self.table_output:
            self.session.as_table().present()
        else:
            self._print_merged_lines()

        if self.config.stats:
            stats = self.session.get_statistics()
            self.console.print(
                f"Files Cached: {stats.file_count}\n"
                f"Log Entries:  {stats.total_lines:,}\n"
                f"Bytes Cached: {stats.total_bytes:,}"
            )
        return status

    def _print_merged_lines(self) -> None:
        for entry in self.session.view.entries:
            self.console.print(
                Text(entry.text, style=Style(color="black", bgcolor=entry.color.hex)),
                overflow="ignore",
                crop=False,
                no_wrap=True,
            )

    def _save_merged_lines(self) -> int:
        try:
            if self.save_to_file == "-":
                for entry in self.session.view.entries:
                    print(entry.text)
            elif self.save_to_file:
                self.session.export_combined_log(self.save_to_file)
            if self.save_to_csv:
                self.session.export_csv(self.save_to_csv)
        except OSError as exc:
            logger.error("export failed: %s", exc)
            return 1
        return 0

    def _display_merged_lines_interactively(self) -> None:
        from .interactive_viewing import InteractiveLogSyncViewerApp

        app = InteractiveLogSyncViewerApp()
        app.config(self.session)
        app.run()


def main():
    parser = make_argument_parser()
    args_ns = parser.parse_args()

    configure_logging(args_ns.verbose)

    try:
        app = LogSyncApplication(args_ns)
    except ValueError as ve:
        parser.error(str(ve))

    sys.exit(app.run())


if __name__ == '__main__':
    main()
