from datetime import datetime, timezone

from funnel_blueprint.firestore_account_store import FirestoreAccountStore
from funnel_blueprint.models.account import Phase3Data


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, docs, doc_id):
        self._docs = docs
        self._id = doc_id

    def get(self):
        return FakeSnapshot(self._id, self._docs.get(self._id))

    def set(self, data, merge=False):
        current = dict(self._docs.get(self._id) or {}) if merge else {}
        current.update(data)
        self._docs[self._id] = current


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def document(self, doc_id):
        return FakeDocument(self.docs, doc_id)


class FakeClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


def test_missing_account_is_none():
    store = FirestoreAccountStore(client=FakeClient())
    assert store.get_account("nobody") is None


def test_update_phase3_creates_and_merges():
    client = FakeClient()
    docs = client.collection("accounts").docs
    docs["acct-1"] = {"phase_2_data": {"done": True}}
    store = FirestoreAccountStore(client=client)

    record = store.update_phase3(
        "acct-1", Phase3Data(funnel_craft_complete=True, funnel_blueprint="doc"), complete=False
    )

    assert record.phase_3_data.funnel_blueprint == "doc"
    assert record.phase_3_data.can_build
    assert docs["acct-1"]["phase_2_data"] == {"done": True}
    assert isinstance(docs["acct-1"]["updated_at"], datetime)


def test_created_at_is_kept_on_later_updates():
    client = FakeClient()
    store = FirestoreAccountStore(client=client)
    first = store.update_phase3("acct-1", Phase3Data(), complete=False)
    second = store.update_phase3("acct-1", Phase3Data(lead_magnet=True), complete=False)

    assert second.created_at == first.created_at
    assert second.updated_at >= first.updated_at
    assert second.phase_3_data.lead_magnet


def test_legacy_document_without_timestamps():
    client = FakeClient()
    client.collection("accounts").docs["acct-1"] = {"phase_3_data": None}
    record = FirestoreAccountStore(client=client).get_account("acct-1")

    assert record.phase_3_data == Phase3Data()
    assert record.created_at.tzinfo == timezone.utc
