from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, Protocol

from .models.account import AccountRecord, Phase3Data


class AccountStore(Protocol):
    def get_account(self, account_id: str) -> AccountRecord | None:
        ...

    def update_phase3(
        self, account_id: str, data: Phase3Data, *, complete: bool
    ) -> AccountRecord:
        ...


class InMemoryAccountStore:
    def __init__(self) -> None:
        self._accounts: Dict[str, AccountRecord] = {}
        self._lock = threading.Lock()

    def get_account(self, account_id: str) -> AccountRecord | None:
        with self._lock:
            record = self._accounts.get(account_id)
            return record.model_copy(deep=True) if record else None

    def update_phase3(
        self, account_id: str, data: Phase3Data, *, complete: bool
    ) -> AccountRecord:
        with self._lock:
            record = self._accounts.get(account_id) or AccountRecord(id=account_id)
            record = record.model_copy(
                update={
                    "phase_3_data": data.model_copy(),
                    "phase_3_complete": complete,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self._accounts[account_id] = record
            return record.model_copy(deep=True)


__all__ = ["AccountStore", "InMemoryAccountStore"]
