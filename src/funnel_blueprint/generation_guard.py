from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Set


class GenerationInProgressError(RuntimeError):
    def __init__(self, account_id: str) -> None:
        super().__init__(f"Generation already in progress for account {account_id}")
        self.account_id = account_id


class GenerationGuard:
    """Rejects a second generation for an account while one is in flight."""

    def __init__(self) -> None:
        self._active: Set[str] = set()
        self._lock = threading.Lock()

    def is_generating(self, account_id: str) -> bool:
        with self._lock:
            return account_id in self._active

    @contextmanager
    def hold(self, account_id: str) -> Iterator[None]:
        with self._lock:
            if account_id in self._active:
                raise GenerationInProgressError(account_id)
            self._active.add(account_id)
        try:
            yield
        finally:
            with self._lock:
                self._active.discard(account_id)


__all__ = ["GenerationGuard", "GenerationInProgressError"]
