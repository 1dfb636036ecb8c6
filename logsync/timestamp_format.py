from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
import re


DEFAULT_PATTERN = "%b %d %H:%M:%S"
DEFAULT_PREFIX_WIDTH = 21

# year used for patterns that have no year directive (syslog style); a leap
# year so that "Feb 29" lines still parse
DEFAULT_YEAR = 1972

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)

# regex fragments for each supported strptime directive
_DIRECTIVE_PATTERNS = {
    "a": r"[A-Za-z]+",
    "A": r"[A-Za-z]+",
    "b": r"[A-Za-z]{3}",
    "B": r"[A-Za-z]+",
    "d": r"\d{1,2}",
    "f": r"\d{1,6}",
    "H": r"\d{1,2}",
    "I": r"\d{1,2}",
    "j": r"\d{1,3}",
    "m": r"\d{1,2}",
    "M": r"\d{1,2}",
    "p": r"[AaPp][Mm]",
    "S": r"\d{1,2}",
    "y": r"\d{2}",
    "Y": r"\d{4}",
    "z": r"(?:Z|[+-]\d{2}:?\d{2}(?::?\d{2})?)",
    "Z": r"[A-Za-z]+",
    "%": "%",
}

KNOWN_FORMATS = [
    # more specific formats first, since a format matching a leading portion
    # of a timestamp is still a match
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S,%f",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S,%f",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%d/%b/%Y:%H:%M:%S %z",
    "%d/%b/%Y %H:%M:%S",
    "%m/%d/%y %H:%M:%S.%f",
    "%m/%d/%y %H:%M:%S",
    "%b %d %H:%M:%S",
]


def _pattern_to_regex(pattern: str) -> str:
    regex_parts = []
    directive_count = 0
    for token in re.split(r"(%.)", pattern):
        if not token:
            continue
        if len(token) == 2 and token.startswith("%"):
            directive = token[1]
            if directive not in _DIRECTIVE_PATTERNS:
                raise ValueError(f"unsupported directive {token!r} in timestamp format {pattern!r}")
            regex_parts.append(_DIRECTIVE_PATTERNS[directive])
            if directive != "%":
                directive_count += 1
        elif "%" in token:
            raise ValueError(f"stray '%' in timestamp format {pattern!r}")
        else:
            # like strptime, any run of whitespace matches any run of whitespace
            regex_parts.append(r"\s+".join(re.escape(s) for s in re.split(r"\s+", token)))

    if not directive_count:
        raise ValueError(f"timestamp format {pattern!r} contains no date or time fields")
    return "".join(regex_parts)


class TimestampFormat:
    """
    Class to parse the timestamp at the start of a log line, using a strptime pattern
    such as "%b %d %H:%M:%S". The pattern is converted to a regular expression, so
    that the timestamp can be found at the start of a line even when log text
    follows it; the matched text is then converted using datetime.strptime.

    Parsed timestamps are returned as integer milliseconds since the epoch. Times with
    no timezone are treated as UTC; times with no year are placed in DEFAULT_YEAR.
    """
    def __init__(self, pattern: str = DEFAULT_PATTERN, prefix_width: int = DEFAULT_PREFIX_WIDTH):
        if prefix_width < 1:
            raise ValueError(f"invalid timestamp prefix width {prefix_width}")
        self.pattern = pattern
        self.prefix_width = prefix_width
        self._match = re.compile(_pattern_to_regex(pattern)).match

        if re.search(r"%[Yy]", pattern.replace("%%", "")):
            self._strptime_format = pattern
            self._year_prefix = ""
        else:
            self._strptime_format = f"%Y {pattern}"
            self._year_prefix = f"{DEFAULT_YEAR} "

    def __repr__(self):
        return f"{type(self).__name__}({self.pattern!r}, prefix_width={self.prefix_width})"

    def __eq__(self, other):
        if not isinstance(other, TimestampFormat):
            return NotImplemented
        return (self.pattern, self.prefix_width) == (other.pattern, other.prefix_width)

    def __hash__(self):
        return hash((self.pattern, self.prefix_width))

    def match_length(self, text: str) -> int:
        """Length of the timestamp matched at the start of text, or 0 if none."""
        m = self._match(text)
        return m.end() if m else 0

    def parse(self, text: str) -> int | None:
        """
        Parse a timestamp from the start of text, returning epoch milliseconds,
        or None if text does not start with a timestamp in this format.
        """
        m = self._match(text)
        if not m:
            return None

        try:
            dt = datetime.strptime(self._year_prefix + m[0], self._strptime_format)
        except ValueError:
            return None

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return (dt - _EPOCH) // _ONE_MILLISECOND

    def prefix_millis(self, text: str) -> int:
        """
        Timestamp of a log line, parsed from its first prefix_width characters. Lines
        shorter than prefix_width, or that do not start with a timestamp, give 0.
        """
        if len(text) < self.prefix_width:
            return 0
        parsed = self.parse(text[:self.prefix_width])
        return parsed if parsed is not None else 0


def detect_format(lines: Iterable[str]) -> TimestampFormat | None:
    """
    Return a TimestampFormat for the first of KNOWN_FORMATS that parses the first
    non-blank line, with a prefix width wide enough for the whole timestamp.
    """
    sample = next((line for line in lines if line.strip()), "")
    for pattern in KNOWN_FORMATS:
        fmt = TimestampFormat(pattern)
        if fmt.parse(sample) is not None:
            fmt.prefix_width = max(DEFAULT_PREFIX_WIDTH, fmt.match_length(sample))
            return fmt
    return None


def format_millis(millis: int) -> str:
    """Show epoch milliseconds as "YYYY-MM-DD HH:MM:SS.SSS" (UTC), or "" for 0."""
    if not millis:
        return ""
    return (_EPOCH + millis * _ONE_MILLISECOND).strftime("%Y-%m-%d %H:%M:%S.%f")[:23]
