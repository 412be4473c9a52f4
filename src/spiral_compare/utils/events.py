"""Explicit subscribe/unsubscribe handles for change notifications."""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle returned by a registration; ``unsubscribe`` is idempotent.

    Usable as a context manager so a registration can be scoped to a block.
    """

    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Optional[Callable[[], None]] = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def unsubscribe(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class Listeners(Generic[T]):
    """Ordered list of callbacks notified with a single payload."""

    def __init__(self) -> None:
        self._callbacks: List[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: Callable[[T], None]) -> Subscription:
        self._callbacks.append(callback)

        def release() -> None:
            self._callbacks.remove(callback)

        return Subscription(release)

    def notify(self, payload: T) -> None:
        # Copy so callbacks may unsubscribe while being notified.
        for callback in list(self._callbacks):
            callback(payload)


__all__ = ["Subscription", "Listeners"]
