"""
User agent rotation.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from pagewarden.errors import ConfigurationError


def get_random_user_agent(
    user_agents: Sequence[str],
    rng: Callable[[], float] = random.random,
) -> str:
    """Pick a user agent uniformly at random.

    Args:
        user_agents: Configured user agent pool.
        rng: Source of uniform values in [0, 1).

    Returns:
        One entry of the pool.

    Raises:
        ConfigurationError: If the pool is empty.
    """
    if not user_agents:
        raise ConfigurationError("No user agents configured (page.user_agents is empty)")

    return user_agents[int(rng() * len(user_agents))]
