"""Periodic key rotation and retirement."""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

from ....config.settings import TokenSettings, required_key_capacity
from ....core.exceptions.base import ConfigurationError
from ....core.protocols import ClockProtocol
from ..entities.key_entry import KeyEntry
from .key_manager import KeyManager

logger = logging.getLogger(__name__)

RotationCallback = Callable[[KeyEntry], Union[None, Awaitable[None]]]


class KeyRotationService:
    """Background task that rotates the active key and retires old keys."""

    def __init__(
        self,
        key_manager: KeyManager,
        rotation_interval: int,
        retention: int,
        check_interval: float = 300,
    ):
        """Initialize rotation service.

        Rotation and retirement both read time from the key manager's clock.

        Args:
            key_manager: Key manager to rotate
            rotation_interval: Rotate once the active key is older than this (seconds)
            retention: Retire keys superseded longer ago than this (seconds)
            check_interval: Seconds between checks while running

        Raises:
            ConfigurationError: If the key manager cannot hold every key
                still inside the retention window
        """
        capacity = required_key_capacity(retention, rotation_interval)
        if key_manager.max_keys < capacity:
            raise ConfigurationError(
                "Key manager is too small for the rotation schedule; keys inside "
                "the retention window would be evicted",
                details={
                    "max_keys": key_manager.max_keys,
                    "required_max_keys": capacity,
                    "rotation_interval": rotation_interval,
                    "retention": retention,
                },
            )

        self.key_manager = key_manager
        self.rotation_interval = rotation_interval
        self.retention = retention
        self.check_interval = check_interval
        self._callbacks: List[RotationCallback] = []
        self._rotation_task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    @classmethod
    def from_settings(cls, key_manager: KeyManager, settings: TokenSettings) -> "KeyRotationService":
        return cls(
            key_manager,
            rotation_interval=settings.key_rotation_interval_seconds,
            retention=settings.key_retention_seconds,
            check_interval=settings.key_rotation_check_interval_seconds,
        )

    @property
    def clock(self) -> ClockProtocol:
        return self.key_manager.clock

    @property
    def is_running(self) -> bool:
        return self._rotation_task is not None and not self._rotation_task.done()

    def add_rotation_callback(self, callback: RotationCallback) -> None:
        """Register a callback invoked with the new active entry after each rotation."""
        self._callbacks.append(callback)

    async def run_once(self) -> Optional[KeyEntry]:
        """Rotate if due and retire expired keys.

        Returns:
            The new active entry if a rotation happened, otherwise None
        """
        rotated: Optional[KeyEntry] = None
        active = self.key_manager.active_entry()

        if active.age(self.clock.now()) >= self.rotation_interval:
            self.key_manager.generate()
            rotated = self.key_manager.active_entry()
            logger.info(f"Rotated token key {active.key_id} -> {rotated.key_id}")

        self.key_manager.retire_older_than(self.retention)

        if rotated is not None:
            await self._notify(rotated)
        return rotated

    async def start(self) -> None:
        """Start periodic rotation."""
        if self._rotation_task is None or self._rotation_task.done():
            self._stop_event.clear()
            self._rotation_task = asyncio.create_task(self._rotation_loop())
            logger.info("Started key rotation")

    async def stop(self) -> None:
        """Stop periodic rotation."""
        self._stop_event.set()

        if self._rotation_task and not self._rotation_task.done():
            try:
                await asyncio.wait_for(self._rotation_task, timeout=5.0)
            except asyncio.TimeoutError:
                self._rotation_task.cancel()
                try:
                    await self._rotation_task
                except asyncio.CancelledError:
                    pass

        logger.info("Stopped key rotation")

    async def _rotation_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Error in key rotation loop: {e}")

            # Wait for next check interval or stop event
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.check_interval)
                break
            except asyncio.TimeoutError:
                continue

    async def _notify(self, entry: KeyEntry) -> None:
        for callback in self._callbacks:
            try:
                result = callback(entry)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Key rotation callback {callback!r} failed: {e}")
