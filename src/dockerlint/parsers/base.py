# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import re
from collections.abc import Iterator


def iter_pattern_matches(text: str, pattern: re.Pattern[str]) -> Iterator[re.Match[str]]:
    """Yield successive non-overlapping matches of ``pattern`` in ``text``.

    Each search resumes at the end of the previous match. Empty matches advance
    by one character so the iteration always terminates.

    Args:
        text: Raw linter output to scan.
        pattern: Compiled regular expression describing one diagnostic.

    Yields:
        re.Match[str]: Match objects in the order they appear in ``text``.
    """

    position = 0
    length = len(text)
    while position <= length:
        match = pattern.search(text, position)
        if match is None:
            return
        yield match
        position = match.end() if match.end() > match.start() else match.end() + 1


def capture(match: re.Match[str], index: int | None) -> str | None:
    """Return the text of group ``index`` or ``None`` when it is unavailable.

    Unset indices, indices past the pattern's group count and groups that did
    not participate in the match all read as absent.

    Args:
        match: Match produced by the diagnostic pattern.
        index: Capture group number, or ``None`` when the field is unset.

    Returns:
        str | None: Captured text, or ``None`` when absent.
    """

    if index is None or index < 0 or index > match.re.groups:
        return None
    return match.group(index)


def capture_int(match: re.Match[str], index: int | None) -> int | None:
    """Return group ``index`` parsed as a base-10 integer.

    Args:
        match: Match produced by the diagnostic pattern.
        index: Capture group number, or ``None`` when the field is unset.

    Returns:
        int | None: Parsed integer, or ``None`` when absent or not numeric.
    """

    raw = capture(match, index)
    if raw is None:
        return None
    try:
        return int(raw.strip(), 10)
    except ValueError:
        return None


__all__ = ["capture", "capture_int", "iter_pattern_matches"]
