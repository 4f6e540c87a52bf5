"""Login token issuance and resolution.

A login token binds a subject id to its issue time:
``codec(pad(8) || msgpack({"t": issued_at, "u": subject_id}))``.
"""

import logging
import secrets
from typing import Optional, Tuple

from ....core.exceptions.tokens import DeserializeError
from ....core.protocols import ClockProtocol
from ....utils.entropy import RandomSource
from ...keys.entities.key_entry import KeyEntry
from ..entities.login_token import LoginTokenPayload, ResolvedLoginToken
from ..entities.padding import make_pad, strip_pad
from ..entities.protocols import CredentialEventSourceProtocol
from ..serializers.msgpack_payload import MessagePackPayloadSerializer
from .token_codec import TokenCodec
from .validator import TimeWindowValidator

logger = logging.getLogger(__name__)


class LoginTokenService:
    """Encodes and decodes login tokens."""

    def __init__(
        self,
        codec: TokenCodec,
        validator: TimeWindowValidator,
        max_age: Optional[int] = None,
        credential_events: Optional[CredentialEventSourceProtocol] = None,
        serializer: Optional[MessagePackPayloadSerializer] = None,
        random_source: RandomSource = secrets.token_bytes,
    ):
        """Initialize login token service.

        Args:
            codec: Token codec
            validator: Time-window validator, also the clock source
            max_age: Maximum token age in seconds; None disables the age check
            credential_events: Identity store view for credential-change checks
            serializer: Payload serializer
            random_source: Secure random byte source for the pad
        """
        self.codec = codec
        self.validator = validator
        self.max_age = max_age
        self.credential_events = credential_events
        self.serializer = serializer or MessagePackPayloadSerializer()
        self._random_source = random_source

    @property
    def clock(self) -> ClockProtocol:
        return self.validator.clock

    def encode(self, subject_id: int) -> str:
        """Issue a login token for `subject_id`."""
        payload = LoginTokenPayload(issued_at=self.clock.now(), subject_id=subject_id)
        body = self.serializer.serialize(payload.to_wire())
        return self.codec.encode(make_pad(self._random_source) + body)

    def decode(self, token: str) -> int:
        """Return the subject id of a valid login token.

        Raises:
            Base64DecodeError: Malformed token text
            CiphertextTooShortError: Token shorter than one block
            DeserializeError: No known key yields a well-formed payload
            TokenExpiredError: Token outside its validity window
        """
        return self.resolve(token).subject_id

    def resolve(self, token: str) -> ResolvedLoginToken:
        """Decode and validate a login token, reporting which key it used."""
        entry, payload = self.decode_payload(token)

        if self.max_age is not None:
            self.validator.check_login_age(payload.issued_at, self.max_age)

        if self.credential_events is not None:
            changed_at = self.credential_events.get_credentials_changed_at(payload.subject_id)
            self.validator.check_not_before(payload.issued_at, changed_at)

        active = self.codec.key_provider.active_entry()
        return ResolvedLoginToken(
            subject_id=payload.subject_id,
            issued_at=payload.issued_at,
            key_id=entry.key_id,
            needs_reissue=entry.key_id != active.key_id,
        )

    def decode_payload(self, token: str) -> Tuple[KeyEntry, LoginTokenPayload]:
        """Decode the payload under the first key that yields a well-formed record.

        No time checks are applied.
        """
        last_error: Optional[DeserializeError] = None
        for entry, plaintext in self.codec.decode_candidates(token):
            try:
                record = self.serializer.deserialize(strip_pad(plaintext))
                return entry, LoginTokenPayload.from_wire(record)
            except DeserializeError as e:
                last_error = e
                continue

        logger.debug(f"Login token rejected by all keys: {last_error}")
        raise DeserializeError(
            "Login token payload could not be decoded",
            details=last_error.details if last_error else {},
        )
