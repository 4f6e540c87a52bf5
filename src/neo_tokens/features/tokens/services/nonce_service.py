"""CSRF nonces.

A nonce is ``codec(pad(8) || varint(issued_at))``. Verification is a pure
time-window check: nothing records consumed nonces, so a nonce can be
replayed any number of times until its window closes.
"""

import logging
import secrets
from typing import Optional

from ....core.exceptions.tokens import DecodeError, DeserializeError
from ....utils.entropy import RandomSource
from ..entities.nonce import NoncePayload
from ..entities.padding import make_pad, strip_pad
from .token_codec import TokenCodec
from .validator import TimeWindowValidator

logger = logging.getLogger(__name__)

DEFAULT_NONCE_MAX_AGE = 300


class NonceService:
    """Creates and verifies time-bounded CSRF nonces."""

    def __init__(
        self,
        codec: TokenCodec,
        validator: TimeWindowValidator,
        default_max_age: int = DEFAULT_NONCE_MAX_AGE,
        random_source: RandomSource = secrets.token_bytes,
    ):
        self.codec = codec
        self.validator = validator
        self.default_max_age = default_max_age
        self._random_source = random_source

    def create(self) -> str:
        """Issue a nonce stamped with the current time."""
        payload = NoncePayload(issued_at=self.validator.clock.now())
        return self.codec.encode(make_pad(self._random_source) + payload.to_bytes())

    def verify(self, token: str, max_age: Optional[int] = None) -> bool:
        """True iff the nonce decodes under a known key and ``0 <= age < max_age``."""
        window = self.default_max_age if max_age is None else max_age
        now = self.validator.clock.now()

        try:
            for entry, plaintext in self.codec.decode_candidates(token):
                try:
                    payload = NoncePayload.from_bytes(strip_pad(plaintext))
                except DeserializeError:
                    continue
                if self.validator.is_within_window(payload.issued_at, window, now):
                    return True
        except DecodeError as e:
            logger.debug(f"Nonce rejected: {e.error_code}")
            return False

        logger.debug("Nonce outside its window or undecodable under every key")
        return False

    def issued_at(self, token: str) -> int:
        """Return the issue time embedded in a nonce.

        Uses the newest key whose plaintext parses.

        Raises:
            DecodeError: If the nonce is malformed under every key
        """
        for _, plaintext in self.codec.decode_candidates(token):
            try:
                return NoncePayload.from_bytes(strip_pad(plaintext)).issued_at
            except DeserializeError:
                continue
        raise DeserializeError("Nonce payload could not be decoded")
