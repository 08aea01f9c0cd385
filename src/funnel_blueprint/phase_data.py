from __future__ import annotations

import logging
from typing import Any

from .account_store import AccountStore
from .models.account import BUILD_STEPS, Phase3Data

logger = logging.getLogger(__name__)


class BlueprintPersister:
    """Reads and writes the funnel phase data of an account.

    Writes are best effort: a store failure is logged and reported as
    ``False`` so callers can keep showing the in-memory blueprint.
    """

    def __init__(self, store: AccountStore) -> None:
        self._store = store

    def get_phase3(self, account_id: str) -> Phase3Data:
        record = self._store.get_account(account_id)
        if record is None:
            return Phase3Data()
        return record.phase_3_data

    def save(self, account_id: str, document: str) -> bool:
        return self._update(
            account_id,
            funnel_blueprint=document,
            funnel_craft_complete=True,
        )

    def load(self, account_id: str) -> str | None:
        try:
            return self.get_phase3(account_id).funnel_blueprint
        except Exception as exc:
            logger.error(
                "Failed to load funnel blueprint",
                exc_info=True,
                extra={"account_id": account_id, "error": str(exc)},
            )
            return None

    def update_build_progress(self, account_id: str, **steps: bool) -> bool:
        unknown = set(steps) - set(BUILD_STEPS)
        if unknown:
            raise ValueError(f"Unknown build steps: {', '.join(sorted(unknown))}")
        return self._update(account_id, **steps)

    def _update(self, account_id: str, **updates: Any) -> bool:
        try:
            current = self.get_phase3(account_id)
            data = current.model_copy(update={**updates, "started": True})
            data.funnel_build_complete = all(getattr(data, step) for step in BUILD_STEPS)
            self._store.update_phase3(account_id, data, complete=data.phase_complete)
        except Exception as exc:
            logger.error(
                "Failed to update funnel phase data",
                exc_info=True,
                extra={
                    "account_id": account_id,
                    "fields": sorted(updates),
                    "error": str(exc),
                },
            )
            return False

        logger.info(
            "Saved funnel phase data",
            extra={
                "account_id": account_id,
                "fields": sorted(updates),
                "progress_percent": data.progress_percent,
            },
        )
        return True


__all__ = ["BlueprintPersister"]
