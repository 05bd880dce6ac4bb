"""
Save cooldown gate.

A timestamp gate in front of the save flow: a save attempted before the
cooldown since the previous accepted attempt is rejected immediately, and
a save attempted while another one is still running is rejected as well.
Neither reaches the save use case.

One gate guards one saving flow: a workout session, or the HTTP save
endpoint as a whole. It is not thread-safe; use it from one event loop.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator

from application.exceptions import SaveCooldownError, SaveInProgressError
from domain.constants import SAVE_COOLDOWN_MS

logger = logging.getLogger(__name__)

COOLDOWN_MESSAGE = "Please wait before saving again."
IN_PROGRESS_MESSAGE = "A save is already in progress."


class SaveGate:
    """
    Minimum-interval + single-flight guard for saves.

    Usage:
        gate = SaveGate()
        with gate.saving():
            service.save_workout(...)
    """

    def __init__(
        self,
        cooldown_ms: int = SAVE_COOLDOWN_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cooldown_s = cooldown_ms / 1000
        self._clock = clock
        self._last_attempt: float | None = None
        self._is_saving = False

    @property
    def is_saving(self) -> bool:
        return self._is_saving

    def acquire(self) -> None:
        """
        Record a save attempt.

        Raises:
            SaveInProgressError: If a save is currently running
            SaveCooldownError: If the previous attempt was too recent
        """
        if self._is_saving:
            raise SaveInProgressError(IN_PROGRESS_MESSAGE)

        now = self._clock()
        if self._last_attempt is not None and now - self._last_attempt < self._cooldown_s:
            logger.info("Save rejected by cooldown")
            raise SaveCooldownError(COOLDOWN_MESSAGE)
        self._last_attempt = now

    @contextmanager
    def saving(self) -> Iterator[None]:
        """Acquire the gate and hold the single-flight flag for the block."""
        self.acquire()
        self._is_saving = True
        try:
            yield
        finally:
            self._is_saving = False
