"""Protocol interfaces shared across neo-tokens features."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockProtocol(Protocol):
    """Source of the current time as whole unix seconds."""
    
    def now(self) -> int:
        """Current unix time in seconds."""
        ...
