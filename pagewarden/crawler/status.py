"""
HTTP status classification for navigation responses.

A range is either an exact status code or an inclusive (min, max) pair.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.async_api import Response

StatusCodeRange = int | Sequence[int]
StatusCodeRangeArray = Sequence[StatusCodeRange]

DEFAULT_SUCCESS_STATUS_CODES: list[StatusCodeRange] = [(0, 399)]


def is_status_code_in_range(
    status_code: int,
    ranges: StatusCodeRangeArray = DEFAULT_SUCCESS_STATUS_CODES,
) -> bool:
    """Check whether a status code falls in any of the given ranges.

    Args:
        status_code: Status code to classify (any integer).
        ranges: Exact codes and/or inclusive (min, max) pairs.

    Returns:
        True if some range contains the code.
    """
    for value in ranges:
        if isinstance(value, int):
            low = high = value
        else:
            low, high = value

        if low <= status_code <= high:
            return True

    return False


def is_response_successful(
    response: Response | None,
    ranges: StatusCodeRangeArray = DEFAULT_SUCCESS_STATUS_CODES,
) -> bool:
    """Classify a navigation response; a missing response is never successful."""
    if response is None:
        return False
    return is_status_code_in_range(response.status, ranges)
