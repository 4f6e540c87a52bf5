"""Time-window checks for decoded token timestamps."""

import logging
from typing import Optional

from ....core.exceptions.tokens import TokenExpiredError
from ....core.protocols import ClockProtocol
from ....utils.timezone import SystemClock

logger = logging.getLogger(__name__)


class TimeWindowValidator:
    """Applies validity windows to token issue times."""

    def __init__(self, clock: Optional[ClockProtocol] = None, clock_skew: int = 0):
        """Initialize validator.

        Args:
            clock: Time source
            clock_skew: Seconds a login token may appear to be issued in the future
        """
        self.clock = clock or SystemClock()
        self.clock_skew = clock_skew

    def is_within_window(self, issued_at: int, max_age: int, now: Optional[int] = None) -> bool:
        """True iff ``0 <= now - issued_at < max_age``."""
        current = self.clock.now() if now is None else now
        age = current - issued_at
        return 0 <= age < max_age

    def check_login_age(self, issued_at: int, max_age: int, now: Optional[int] = None) -> None:
        """Reject login tokens older than `max_age` or issued in the future.

        Raises:
            TokenExpiredError: If the token is outside its window
        """
        current = self.clock.now() if now is None else now
        age = current - issued_at
        if age < -self.clock_skew:
            raise TokenExpiredError(
                "Token issued in the future",
                details={"reason": "not_yet_valid", "age": age},
            )
        if age >= max_age:
            raise TokenExpiredError(
                "Token has expired",
                details={"reason": "expired", "age": age, "max_age": max_age},
            )

    def check_not_before(self, issued_at: int, credentials_changed_at: Optional[int]) -> None:
        """Reject tokens issued before the subject's latest credential change.

        Raises:
            TokenExpiredError: If the token predates the change
        """
        if credentials_changed_at is not None and issued_at < credentials_changed_at:
            raise TokenExpiredError(
                "Token predates a credential change",
                details={"reason": "credentials_changed"},
            )
