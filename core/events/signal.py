from __future__ import annotations

from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Signal(Generic[T]):
    """
    Qt-free observer used by the wizard components.
    Listeners that belong to deleted Qt widgets are dropped on the next emit.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[T], None]] = []
        self._lock: RLock = RLock()

    def connect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback not in self._listeners:
                self._listeners.append(callback)

    def disconnect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    def disconnect_all(self) -> None:
        with self._lock:
            self._listeners.clear()

    def emit(self, payload: T) -> None:
        with self._lock:
            listeners = list(self._listeners)
        dead: list[Callable[[T], None]] = []
        for callback in listeners:
            try:
                callback(payload)
            except RuntimeError as exc:
                if "deleted" not in str(exc).lower():
                    raise
                dead.append(callback)
            except ReferenceError:
                dead.append(callback)
        for callback in dead:
            self.disconnect(callback)
