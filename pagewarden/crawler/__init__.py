"""
pagewarden crawler module.

Provides scoped page usage, navigation, request pacing, user agent
rotation and response status classification.
"""

from pagewarden.crawler.blocker import (
    ResourceBlocker,
    get_resource_blocker,
    reset_resource_blocker,
)
from pagewarden.crawler.identity import get_random_user_agent
from pagewarden.crawler.pacing import (
    PacingPolicy,
    delay,
    get_break_time_remaining,
    get_sleep_time,
    is_break_time,
)
from pagewarden.crawler.page_session import close_page, using_page, using_response
from pagewarden.crawler.status import (
    DEFAULT_SUCCESS_STATUS_CODES,
    StatusCodeRange,
    StatusCodeRangeArray,
    is_response_successful,
    is_status_code_in_range,
)

__all__ = [
    # Page session
    "using_page",
    "using_response",
    "close_page",
    # Pacing
    "PacingPolicy",
    "get_sleep_time",
    "is_break_time",
    "get_break_time_remaining",
    "delay",
    # Identity
    "get_random_user_agent",
    # Blocker
    "ResourceBlocker",
    "get_resource_blocker",
    "reset_resource_blocker",
    # Status
    "DEFAULT_SUCCESS_STATUS_CODES",
    "StatusCodeRange",
    "StatusCodeRangeArray",
    "is_status_code_in_range",
    "is_response_successful",
]
