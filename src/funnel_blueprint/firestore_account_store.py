from __future__ import annotations

import logging
from datetime import datetime, timezone

from google.cloud import firestore

from .models.account import AccountRecord, Phase3Data

logger = logging.getLogger(__name__)


class FirestoreAccountStore:
    """Firestore-backed account records for production use."""

    COLLECTION_NAME = "accounts"

    def __init__(self, project_id: str | None = None, *, client: firestore.Client | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def get_account(self, account_id: str) -> AccountRecord | None:
        """Retrieve an account record by ID."""
        doc = self._collection.document(account_id).get()

        if not doc.exists:
            return None

        return self._from_firestore_dict(doc.id, doc.to_dict())

    def update_phase3(
        self, account_id: str, data: Phase3Data, *, complete: bool
    ) -> AccountRecord:
        """Overwrite the phase 3 data of an account, creating the record if needed."""
        doc_ref = self._collection.document(account_id)
        now = datetime.now(timezone.utc)

        update_data = {
            "phase_3_data": data.model_dump(),
            "phase_3_complete": complete,
            "updated_at": now,
        }

        snapshot = doc_ref.get()
        if not snapshot.exists:
            update_data["created_at"] = now

        # merge=True keeps other phases' data on the same document
        doc_ref.set(update_data, merge=True)

        logger.info(
            "Updated account phase 3 data",
            extra={
                "account_id": account_id,
                "funnel_craft_complete": data.funnel_craft_complete,
                "funnel_build_complete": data.funnel_build_complete,
                "phase_3_complete": complete,
            },
        )

        updated_doc = doc_ref.get()
        return self._from_firestore_dict(updated_doc.id, updated_doc.to_dict())

    def _from_firestore_dict(self, account_id: str, data: dict) -> AccountRecord:
        """Convert a Firestore document dict to an AccountRecord."""
        phase_data = data.get("phase_3_data") or {}

        return AccountRecord(
            id=account_id,
            phase_3_data=Phase3Data.model_validate(phase_data),
            phase_3_complete=data.get("phase_3_complete", False),
            created_at=data.get("created_at") or data.get("updated_at") or datetime.now(timezone.utc),
            updated_at=data.get("updated_at") or datetime.now(timezone.utc),
        )


__all__ = ["FirestoreAccountStore"]
