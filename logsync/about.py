from . import __version__

text = r"""
# logsync

The `logsync` utility shows one or more log files merged into a single log, in the order of the
timestamps at the start of each line. Each file is shown in its own color, so that interleaved
events from separate programs can be read as if they were written to one log.

## Timestamps

Each line is expected to start with a timestamp. Timestamps are parsed from the first 21 characters
of the line, using a `strptime`-style format. The default format is `%b %d %H:%M:%S`, as used in
syslog files:

    Jan 02 15:04:05 sshd[1234]: Accepted publickey for admin

Lines that are too short, or that do not start with a timestamp in the current format, sort ahead of
all timestamped lines. Lines with the same timestamp are ordered by file name, and then by line number.

Some other formats:

| Format                   | Example                   |
|--------------------------|---------------------------|
| %Y-%m-%d %H:%M:%S        | 2023-07-14 08:00:01       |
| %Y-%m-%d %H:%M:%S,%f     | 2023-07-14 08:00:01,123   |
| %m/%d/%y %H:%M:%S.%f     | 07/14/23 08:00:01.123     |
| %d/%b/%Y:%H:%M:%S %z     | 14/Jul/2023:08:00:01 +0000 |

Formats with more than 21 characters of timestamp need a larger `--prefix-width`.

## Interactive functions

| Key | Function                                                              |
|:---:|-----------------------------------------------------------------------|
|  F  | Prompt for search string and move to the next line containing it     |
|  N  | Move to the next line containing the current search string           |
|  P  | Move to the previous line containing the current search string       |
|  C  | Toggle case-sensitive searching                                       |
|  L  | Prompt for line number to move cursor to                              |
|  T  | Prompt for a new timestamp format, and re-merge the files             |
|  V  | Show or hide the file of the current line                             |
|  A  | Show all files                                                        |
|  R  | Re-read all files from disk (also F5)                                 |
|  H  | Display this helpful text                                             |
|  Q  | Quit                                                                  |

## Command line options

| Option                   | Description                                                       |
|--------------------------|-------------------------------------------------------------------|
| --interactive, -i        | display in interactive mode                                       |
| --output, -o             | save the merged log text to a file ('-' for stdout)               |
| --csv                    | save merged logs as CSV                                           |
| --table                  | show merged logs as a table                                       |
| --timestamp-format, -t   | strptime format of log timestamps, or 'auto'                      |
| --prefix-width           | number of leading characters parsed for the timestamp             |
| --encoding, -enc         | encoding of the log files                                         |
| --warm-cache             | reuse file contents already read when the file set changes       |
| --stats                  | print file statistics                                             |
| --verbose, -v            | show debug logging                                                |

`logsync` reads text files, and can also read directly from `.gz` gzip'ped files.

"""  # noqa


def about_text(statistics=None) -> str:
    ret = text + f"## About logsync\n\nlogsync version {__version__}\n\nMIT License\n"
    if statistics is not None:
        ret += (
            "\n## Statistics\n\n"
            f"Files Cached: {statistics.file_count}\n\n"
            f"Log Entries: {statistics.total_lines:,}\n\n"
            f"Bytes Cached: {statistics.total_bytes:,}\n"
        )
    return ret
