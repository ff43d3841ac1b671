"""Reader/writer lock guarding symbol tables and production stores.

Any number of readers may hold the lock together; a writer holds it alone.
Acquisition is bounded by a timeout, and a timeout surfaces as a
:class:`~lsystems.errors.LockingError` instead of blocking forever.
"""

# Standard library
import threading
from collections.abc import Iterator
from contextlib import contextmanager

# Local libraries
from lsystems.errors import LockingError
from lsystems.parameters import config

UNSET = object()


class ReadWriteLock:
    def __init__(self, name: str = "lock", timeout: float | None | object = UNSET) -> None:
        self.name = name
        self._timeout = config.lock_timeout if timeout is UNSET else timeout
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    def _resolve(self, timeout: float | None | object) -> float | None:
        return self._timeout if timeout is UNSET else timeout

    def acquire_read(self, timeout: float | None | object = UNSET) -> None:
        timeout = self._resolve(timeout)
        with self._cond:
            if not self._cond.wait_for(lambda: not self._writer, timeout):
                msg = f"timed out after {timeout}s waiting to read {self.name}"
                raise LockingError(msg)
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                msg = f"{self.name} released for reading without being held"
                raise LockingError(msg)
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: float | None | object = UNSET) -> None:
        timeout = self._resolve(timeout)
        with self._cond:
            if not self._cond.wait_for(
                lambda: not self._writer and self._readers == 0,
                timeout,
            ):
                msg = f"timed out after {timeout}s waiting to write {self.name}"
                raise LockingError(msg)
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                msg = f"{self.name} released for writing without being held"
                raise LockingError(msg)
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self, timeout: float | None | object = UNSET) -> Iterator[None]:
        """Hold the lock shared for the duration of the block."""
        self.acquire_read(timeout)
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self, timeout: float | None | object = UNSET) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        self.acquire_write(timeout)
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def locked_for_write(self) -> bool:
        return self._writer
