"""Active symmetric key management.

Keys are held newest first. The newest entry is the active key used for
encoding; every retained entry is still accepted for decoding so tokens
survive a rotation until their key is retired.
"""

import logging
import secrets
from typing import List, Optional, Tuple, Union

from ....config.settings import TokenSettings
from ....core.exceptions.base import ConfigurationError
from ....core.exceptions.keys import KeyNotConfiguredError
from ....core.protocols import ClockProtocol
from ....utils.entropy import RandomSource, secure_random_bytes
from ....utils.locks import ReadWriteLock
from ....utils.timezone import SystemClock
from ..entities.key_entry import KeyEntry

logger = logging.getLogger(__name__)

KEY_BYTE_LENGTH = 16

DEFAULT_MAX_KEYS = 16


class KeyManager:
    """Thread-safe owner of the active key and its predecessors."""

    def __init__(
        self,
        key: Optional[bytes] = None,
        *,
        allow_implicit_generation: bool = True,
        max_keys: int = DEFAULT_MAX_KEYS,
        clock: Optional[ClockProtocol] = None,
        random_source: RandomSource = secrets.token_bytes,
    ):
        """Initialize key manager.

        Args:
            key: Optional key to install as the active key
            allow_implicit_generation: Generate a key on first use when none is set;
                when False, `get()` fails closed with KeyNotConfiguredError
            max_keys: Number of keys retained for decoding, active key included
            clock: Time source for key creation timestamps
            random_source: Secure random byte source
        """
        if max_keys < 1:
            raise ConfigurationError(
                "max_keys must be at least 1",
                details={"max_keys": max_keys},
            )

        self.allow_implicit_generation = allow_implicit_generation
        self.max_keys = max_keys
        self._clock = clock or SystemClock()
        self._random_source = random_source
        self._lock = ReadWriteLock()
        self._entries: Tuple[KeyEntry, ...] = ()

        if key is not None:
            self.set(key)

    @classmethod
    def from_settings(
        cls,
        settings: TokenSettings,
        clock: Optional[ClockProtocol] = None,
    ) -> "KeyManager":
        """Build a key manager from token settings."""
        return cls(
            settings.key_bytes(),
            allow_implicit_generation=settings.allow_implicit_key_generation,
            max_keys=settings.max_keys,
            clock=clock,
        )

    @property
    def clock(self) -> ClockProtocol:
        return self._clock

    @property
    def has_key(self) -> bool:
        with self._lock.read_locked():
            return bool(self._entries)

    def generate(self) -> bytes:
        """Generate a random key, install it as the active key and return it.

        Raises:
            EntropyUnavailableError: If the secure random source fails
        """
        entry = self._new_entry()
        self._install(entry)
        logger.info(f"Generated new {entry.bit_length}-bit key {entry.key_id}")
        return entry.key

    def set(self, key: Union[bytes, bytearray]) -> None:
        """Install `key` as the active key.

        Raises:
            InvalidKeyLengthError: If the key is not 16, 24 or 32 bytes
        """
        entry = KeyEntry.create(key, self._clock.now())
        self._install(entry)
        logger.info(f"Installed {entry.bit_length}-bit key {entry.key_id}")

    def get(self) -> bytes:
        """Return the active key, generating one on first use if allowed."""
        return self.active_entry().key

    def active_entry(self) -> KeyEntry:
        """Return the active key entry, generating one on first use if allowed.

        Raises:
            KeyNotConfiguredError: If no key is set and implicit generation is disabled
            EntropyUnavailableError: If implicit generation cannot read random bytes
        """
        with self._lock.read_locked():
            entries = self._entries
        if entries:
            return entries[0]
        return self._generate_implicitly()

    def verification_entries(self) -> Tuple[KeyEntry, ...]:
        """Return all retained key entries, newest first."""
        with self._lock.read_locked():
            entries = self._entries
        if entries:
            return entries
        return (self._generate_implicitly(),)

    def retire_older_than(self, max_age_seconds: int) -> List[KeyEntry]:
        """Drop keys superseded more than `max_age_seconds` ago.

        Age is measured from when a key stopped being active, not from when
        it was created, so a token issued just before a rotation keeps its
        key for the full window. The active key is never retired.

        Returns:
            The retired entries
        """
        now = self._clock.now()
        with self._lock.write_locked():
            if not self._entries:
                return []
            active, older = self._entries[0], self._entries[1:]
            kept = tuple(e for e in older if e.superseded_for(now) <= max_age_seconds)
            retired = [e for e in older if e.superseded_for(now) > max_age_seconds]
            self._entries = (active,) + kept

        for entry in retired:
            logger.info(f"Retired key {entry.key_id} {entry.superseded_for(now)}s after it was superseded")
        return retired

    def _new_entry(self) -> KeyEntry:
        key = secure_random_bytes(KEY_BYTE_LENGTH, self._random_source)
        return KeyEntry.create(key, self._clock.now())

    def _install(self, entry: KeyEntry) -> None:
        with self._lock.write_locked():
            previous = tuple(
                e if e.is_superseded else e.supersede(entry.created_at)
                for e in self._entries
                if e.key_id != entry.key_id
            )
            ring = (entry,) + previous
            self._entries = ring[: self.max_keys]
            evicted = ring[self.max_keys:]

        for dropped in evicted:
            logger.warning(
                f"Key ring full ({self.max_keys} keys); evicted key {dropped.key_id}. "
                "Tokens issued under it no longer decode."
            )

    def _generate_implicitly(self) -> KeyEntry:
        if not self.allow_implicit_generation:
            raise KeyNotConfiguredError(
                "No token key configured and implicit key generation is disabled"
            )

        candidate = self._new_entry()
        with self._lock.write_locked():
            # Another thread may have installed a key while we were generating
            if self._entries:
                return self._entries[0]
            self._entries = (candidate,)

        logger.warning(
            f"No token key configured; generated ephemeral key {candidate.key_id}. "
            "Tokens issued with it become unverifiable after a restart."
        )
        return candidate
