"""Pull an animal count out of free-text model output."""

from __future__ import annotations

import re

_DIGITS = re.compile(r"([0-9]+)")


def extract_count(text: str | None) -> int:
    """Return the first run of ASCII digits in ``text``, or 0.

    The first number wins, so "3 tigers out of 10 animals" yields 3 and
    "10 animals, 3 of them tigers" yields 10. Digits from other scripts
    are not numbers here, and a run too long to convert counts as 0.
    """
    if not text:
        return 0
    match = _DIGITS.search(text)
    if not match:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        return 0
