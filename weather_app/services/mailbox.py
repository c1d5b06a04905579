import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Mailbox(Generic[T]):
    """
    Single-slot handoff between threads:
      send() overwrites any value not yet taken, try_take() never waits.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._full = False

    def send(self, value: T) -> None:
        with self._lock:
            self._value = value
            self._full = True

    def try_take(self) -> Optional[T]:
        with self._lock:
            if not self._full:
                return None
            value, self._value = self._value, None
            self._full = False
            return value
