from __future__ import annotations

from collections.abc import Sequence

from .log_entry import LogEntry


def _matcher(search_text: str, match_case: bool):
    if match_case:
        return lambda s: search_text in s
    search_text = search_text.casefold()
    return lambda s: search_text in s.casefold()


def find_next(
        entries: Sequence[LogEntry],
        search_text: str,
        start: int | None = None,
        *,
        match_case: bool = False,
        wrap: bool = True,
) -> int | None:
    """
    Return the index of the first entry after start whose text contains search_text,
    or None if there is none. With wrap=True, the search continues from the top,
    up to and including start. A start of None searches from the first entry.
    """
    if not search_text or not entries:
        return None

    matches = _matcher(search_text, match_case)
    start = -1 if start is None else start

    search_order = list(range(start + 1, len(entries)))
    if wrap:
        search_order.extend(range(0, min(start + 1, len(entries))))

    return next((i for i in search_order if matches(entries[i].text)), None)


def find_previous(
        entries: Sequence[LogEntry],
        search_text: str,
        start: int | None = None,
        *,
        match_case: bool = False,
        wrap: bool = True,
) -> int | None:
    """
    Return the index of the last entry before start whose text contains search_text,
    or None if there is none. With wrap=True, the search continues from the bottom,
    down to and including start. A start of None searches from the last entry.
    """
    if not search_text or not entries:
        return None

    matches = _matcher(search_text, match_case)
    start = len(entries) if start is None else start

    search_order = list(range(min(start, len(entries)) - 1, -1, -1))
    if wrap:
        search_order.extend(range(len(entries) - 1, max(start, 0) - 1, -1))

    return next((i for i in search_order if matches(entries[i].text)), None)
