"""Timezone utilities for neo-tokens.

Token timestamps are whole unix seconds in UTC. Everything that reads the
current time goes through a clock object so tests can pin it.
"""

import time as time_module


def utc_timestamp() -> int:
    """
    Get current UTC timestamp as whole seconds since epoch.
    
    Returns:
        Current timestamp in seconds since epoch
    """
    return int(time_module.time())


class SystemClock:
    """Clock backed by the system wall clock."""
    
    def now(self) -> int:
        return utc_timestamp()


__all__ = [
    "utc_timestamp",
    "SystemClock",
]
