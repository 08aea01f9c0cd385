import pytest

from funnel_blueprint.account_store import InMemoryAccountStore
from funnel_blueprint.models.account import Phase3Data
from funnel_blueprint.phase_data import BlueprintPersister


class BrokenStore:
    def get_account(self, account_id):
        raise ConnectionError("store unavailable")

    def update_phase3(self, account_id, data, *, complete):
        raise ConnectionError("store unavailable")


@pytest.fixture
def store():
    return InMemoryAccountStore()


@pytest.fixture
def persister(store):
    return BlueprintPersister(store)


def test_missing_account_reads_as_defaults(persister):
    data = persister.get_phase3("unknown")
    assert data == Phase3Data()
    assert data.progress_percent == 0
    assert not data.can_build
    assert persister.load("unknown") is None


def test_save_then_load(persister, store, document):
    assert persister.save("acct-1", document) is True
    assert persister.load("acct-1") == document

    data = persister.get_phase3("acct-1")
    assert data.started
    assert data.funnel_craft_complete
    assert data.can_build
    assert data.progress_percent == 20
    assert data.build_progress_percent == 0
    assert store.get_account("acct-1").phase_3_complete is False


def test_saving_again_overwrites_blueprint(persister):
    persister.save("acct-1", "first")
    persister.save("acct-1", "second")
    assert persister.load("acct-1") == "second"


def test_build_progress_completes_phase(persister, store):
    persister.save("acct-1", "blueprint")
    persister.update_build_progress("acct-1", lead_magnet=True, landing_page=True)
    assert persister.get_phase3("acct-1").progress_percent == 60

    persister.update_build_progress("acct-1", email_sequence=True, social_capture=True)
    data = persister.get_phase3("acct-1")
    assert data.funnel_build_complete
    assert data.build_progress_percent == 100
    assert data.progress_percent == 100
    assert data.phase_complete
    assert data.funnel_blueprint == "blueprint"
    assert store.get_account("acct-1").phase_3_complete is True


def test_build_steps_without_blueprint_do_not_complete_phase(persister, store):
    persister.update_build_progress(
        "acct-1", lead_magnet=True, landing_page=True, email_sequence=True, social_capture=True
    )
    data = persister.get_phase3("acct-1")
    assert data.funnel_build_complete
    assert data.progress_percent == 80
    assert not data.phase_complete
    assert store.get_account("acct-1").phase_3_complete is False


def test_unchecking_a_step_reopens_build(persister):
    persister.update_build_progress(
        "acct-1", lead_magnet=True, landing_page=True, email_sequence=True, social_capture=True
    )
    persister.update_build_progress("acct-1", landing_page=False)
    assert not persister.get_phase3("acct-1").funnel_build_complete


def test_unknown_build_step_is_rejected(persister):
    with pytest.raises(ValueError):
        persister.update_build_progress("acct-1", homepage=True)


def test_store_failures_are_reported_not_raised(document, caplog):
    persister = BlueprintPersister(BrokenStore())
    assert persister.save("acct-1", document) is False
    assert persister.load("acct-1") is None
    assert "Failed to update funnel phase data" in caplog.text


def test_store_returns_copies(store):
    data = Phase3Data(funnel_craft_complete=True)
    store.update_phase3("acct-1", data, complete=False)
    record = store.get_account("acct-1")
    record.phase_3_data.lead_magnet = True
    assert store.get_account("acct-1").phase_3_data.lead_magnet is False
