"""Tests for the project store lifecycle."""

import json

import pytest

from advisory.client import AdvisoryError
from chainlance.models.project import ProjectStatus, SubmissionStatus, TBD_DEADLINE
from chainlance.models.transaction import TransactionType
from chainlance.services.ledger import ESCROW_ACCOUNT
from chainlance.services.store import (
    ProjectStore,
    TransitionError,
    ValidationFailed,
    dump_projects,
    load_projects,
)
from tests.conftest import CLIENT_ADDR, FREELANCER_ADDR, OTHER_ADDR, STORAGE_KEY


@pytest.fixture
def funded(store, draft):
    project = store.create_project(draft, CLIENT_ADDR)
    store.fund(project.id, CLIENT_ADDR)
    return store.get(project.id)


@pytest.fixture
def hired(store, funded):
    proposal = store.submit_proposal(funded.id, FREELANCER_ADDR, "I can do this")
    store.accept_proposal(funded.id, proposal.id)
    return store.get(funded.id)


class TestCreateProject:

    def test_created_project_is_open(self, store, draft):
        project = store.create_project(draft, CLIENT_ADDR)
        assert project.status == ProjectStatus.OPEN
        assert project.proposals == []
        assert project.budget == 2.5
        assert project.deadline == TBD_DEADLINE
        assert project.skills == ["React", "Tailwind"]
        assert project.client_name == "7xKX...gAsU"
        assert project.id.startswith("sol-p-")

    def test_newest_first(self, store, draft):
        first = store.create_project(draft, CLIENT_ADDR)
        second = store.create_project(draft, CLIENT_ADDR)
        assert [p.id for p in store.projects] == [second.id, first.id]
        assert first.id != second.id

    def test_requires_account(self, store, draft):
        with pytest.raises(ValidationFailed):
            store.create_project(draft, "")
        assert store.projects == []

    def test_persists_snapshot(self, store, storage, draft):
        project = store.create_project(draft, CLIENT_ADDR)
        stored = json.loads(storage.get_item(STORAGE_KEY))
        assert len(stored) == 1
        assert stored[0]["id"] == project.id
        assert stored[0]["phase"]["status"] == "OPEN"


class TestFund:

    def test_open_to_funded(self, store, draft):
        project = store.create_project(draft, CLIENT_ADDR)
        tx = store.fund(project.id, CLIENT_ADDR)
        assert store.get(project.id).status == ProjectStatus.FUNDED
        assert len(store.ledger) == 1
        assert tx.type == TransactionType.DEPOSIT
        assert tx.amount == 2.5
        assert tx.sender == CLIENT_ADDR
        assert tx.recipient == ESCROW_ACCOUNT
        assert tx.id.startswith("sig_")

    def test_missing_project_is_noop(self, store, draft):
        store.create_project(draft, CLIENT_ADDR)
        before = store.projects
        assert store.fund("sol-p-missing", CLIENT_ADDR) is None
        assert store.projects == before
        assert len(store.ledger) == 0

    def test_fund_twice_rejected(self, store, funded):
        with pytest.raises(TransitionError):
            store.fund(funded.id, CLIENT_ADDR)
        assert len(store.ledger) == 1


class TestSubmitProposal:

    def test_appends_in_order(self, store, funded):
        first = store.submit_proposal(funded.id, FREELANCER_ADDR, "I can do this")
        second = store.submit_proposal(funded.id, OTHER_ADDR, "  Me too  ")
        proposals = store.get(funded.id).proposals
        assert [p.id for p in proposals] == [first.id, second.id]
        assert second.message == "Me too"
        assert first.project_id == funded.id
        assert first.resume_base64 is None
        assert first.ai_analysis is None

    def test_allowed_on_open_project(self, store, draft):
        project = store.create_project(draft, CLIENT_ADDR)
        assert store.submit_proposal(project.id, FREELANCER_ADDR, "hello") is not None

    def test_duplicates_not_blocked_here(self, store, funded):
        store.submit_proposal(funded.id, FREELANCER_ADDR, "one")
        store.submit_proposal(funded.id, FREELANCER_ADDR, "two")
        assert len(store.get(funded.id).proposals) == 2

    def test_empty_message_rejected(self, store, funded):
        with pytest.raises(ValidationFailed):
            store.submit_proposal(funded.id, FREELANCER_ADDR, "   ")
        assert store.get(funded.id).proposals == []

    def test_resume_is_analyzed(self, store, funded, advisory):
        resume = "data:application/pdf;base64,JVBERi0xLjQ="
        proposal = store.submit_proposal(funded.id, FREELANCER_ADDR, "see resume", resume)
        assert proposal.resume_base64 == resume
        assert proposal.ai_analysis == advisory.resume_analysis
        assert advisory.calls == [("analyze_resume", funded.description, resume)]

    def test_no_resume_skips_analysis(self, store, funded, advisory):
        store.submit_proposal(funded.id, FREELANCER_ADDR, "no file")
        assert advisory.calls == []

    def test_advisory_failure_leaves_store_unchanged(self, store, funded, advisory):
        advisory.fail = True
        with pytest.raises(AdvisoryError):
            store.submit_proposal(funded.id, FREELANCER_ADDR, "see resume", "JVBERi0=")
        assert store.get(funded.id).proposals == []

    def test_rejected_after_hiring(self, store, hired):
        with pytest.raises(TransitionError):
            store.submit_proposal(hired.id, OTHER_ADDR, "late")

    def test_missing_project_is_noop(self, store):
        assert store.submit_proposal("sol-p-missing", FREELANCER_ADDR, "hi") is None


class TestAcceptProposal:

    def test_hires_and_sets_deadline(self, store, funded, advisory):
        proposal = store.submit_proposal(funded.id, FREELANCER_ADDR, "I can do this")
        project = store.accept_proposal(funded.id, proposal.id)
        assert project.status == ProjectStatus.IN_PROGRESS
        assert project.hired_freelancer_id == FREELANCER_ADDR
        assert project.deadline == "2026-01-17"
        assert advisory.calls[-1] == ("estimate_deadline", funded.description, "I can do this")

    def test_other_proposals_kept(self, store, funded):
        store.submit_proposal(funded.id, OTHER_ADDR, "pick me")
        chosen = store.submit_proposal(funded.id, FREELANCER_ADDR, "no, me")
        project = store.accept_proposal(funded.id, chosen.id)
        assert len(project.proposals) == 2
        assert project.hired_freelancer_id == FREELANCER_ADDR

    def test_unknown_proposal_is_noop(self, store, funded):
        assert store.accept_proposal(funded.id, "prop-missing") is None
        assert store.get(funded.id).status == ProjectStatus.FUNDED

    def test_advisory_failure_leaves_store_unchanged(self, store, funded, advisory):
        proposal = store.submit_proposal(funded.id, FREELANCER_ADDR, "I can do this")
        advisory.fail = True
        with pytest.raises(AdvisoryError):
            store.accept_proposal(funded.id, proposal.id)
        project = store.get(funded.id)
        assert project.status == ProjectStatus.FUNDED
        assert project.hired_freelancer_id is None
        assert project.deadline == TBD_DEADLINE

    def test_zero_day_estimate_kept(self, store, funded, advisory):
        proposal = store.submit_proposal(funded.id, FREELANCER_ADDR, "I can do this")
        advisory.deadline_days = 0
        assert store.accept_proposal(funded.id, proposal.id).deadline == "2026-01-10"


class TestSubmitWork:

    def test_audits_without_changing_status(self, store, hired, advisory):
        project = store.submit_work(hired.id, " https://github.com/x/y ")
        assert project.status == ProjectStatus.IN_PROGRESS
        assert project.submission_url == "https://github.com/x/y"
        assert project.submission_status == SubmissionStatus.AUDITED
        assert project.submission_audit == advisory.audit
        assert project.hired_freelancer_id == FREELANCER_ADDR

    def test_resubmission_replaces_previous(self, store, hired, advisory):
        store.submit_work(hired.id, "https://github.com/x/old")
        advisory.audit = "REVISIONS NEEDED"
        project = store.submit_work(hired.id, "https://github.com/x/new")
        assert project.submission_url == "https://github.com/x/new"
        assert project.submission_audit == "REVISIONS NEEDED"

    def test_empty_url_rejected(self, store, hired):
        with pytest.raises(ValidationFailed):
            store.submit_work(hired.id, "")
        assert store.get(hired.id).submission is None

    def test_requires_in_progress(self, store, funded):
        with pytest.raises(TransitionError):
            store.submit_work(funded.id, "https://github.com/x/y")

    def test_advisory_failure_leaves_store_unchanged(self, store, hired, advisory):
        advisory.fail = True
        with pytest.raises(AdvisoryError):
            store.submit_work(hired.id, "https://github.com/x/y")
        assert store.get(hired.id).submission is None


class TestRelease:

    def test_completes_and_pays_freelancer(self, store, hired):
        store.submit_work(hired.id, "https://github.com/x/y")
        tx = store.release(hired.id)
        project = store.get(hired.id)
        assert project.status == ProjectStatus.COMPLETED
        assert project.hired_freelancer_id == FREELANCER_ADDR
        assert project.submission_url == "https://github.com/x/y"
        assert tx.type == TransactionType.RELEASE
        assert tx.recipient == FREELANCER_ADDR
        assert tx.sender == ESCROW_ACCOUNT
        assert tx.amount == 2.5
        assert tx.id.startswith("sig_rel_")

    def test_requires_in_progress(self, store, funded):
        with pytest.raises(TransitionError):
            store.release(funded.id)
        assert len(store.ledger) == 1

    def test_missing_project_is_noop(self, store):
        assert store.release("sol-p-missing") is None


class TestTotalValueLocked:

    def test_empty_pool(self, store):
        assert store.total_value_locked() == 0

    def test_sums_every_status(self, store, draft, funded):
        store.create_project(draft.model_copy(update={"budget": 4.0}), OTHER_ADDR)
        assert store.total_value_locked() == 6.5


class TestPersistence:

    def test_reload_reproduces_collection(self, store, storage, advisory, draft, hired):
        store.create_project(draft, CLIENT_ADDR)
        store.submit_work(hired.id, "https://github.com/x/y")
        reloaded = ProjectStore(storage, STORAGE_KEY, advisory)
        assert reloaded.projects == store.projects

    def test_ledger_not_persisted(self, store, storage, advisory, funded):
        reloaded = ProjectStore(storage, STORAGE_KEY, advisory)
        assert len(reloaded.ledger) == 0

    def test_empty_storage_loads_nothing(self):
        assert load_projects(None) == []

    def test_dump_load_round_trip(self, store, hired):
        assert load_projects(dump_projects(store.projects)) == store.projects

    def test_incompatible_snapshot_raises(self, storage, advisory):
        storage.set_item(STORAGE_KEY, json.dumps([{"id": "x"}]))
        with pytest.raises(ValueError):
            ProjectStore(storage, STORAGE_KEY, advisory)


def test_full_lifecycle(store, draft, advisory):
    project = store.create_project(draft, CLIENT_ADDR)
    assert project.status == ProjectStatus.OPEN
    assert project.proposals == []

    store.fund(project.id, CLIENT_ADDR)
    assert store.get(project.id).status == ProjectStatus.FUNDED
    deposits = [tx for tx in store.ledger.entries if tx.type == TransactionType.DEPOSIT]
    assert len(deposits) == 1 and deposits[0].amount == 2.5

    proposal = store.submit_proposal(project.id, FREELANCER_ADDR, "I can do this")
    assert len(store.get(project.id).proposals) == 1

    advisory.deadline_days = 7
    accepted = store.accept_proposal(project.id, proposal.id)
    assert accepted.status == ProjectStatus.IN_PROGRESS
    assert accepted.deadline == "2026-01-17"
    assert accepted.hired_freelancer_id == FREELANCER_ADDR

    submitted = store.submit_work(project.id, "https://github.com/x/y")
    assert submitted.submission_status == SubmissionStatus.AUDITED

    store.release(project.id)
    assert store.get(project.id).status == ProjectStatus.COMPLETED
    releases = [tx for tx in store.ledger.entries if tx.type == TransactionType.RELEASE]
    assert len(releases) == 1
    assert releases[0].amount == 2.5
    assert releases[0].recipient == FREELANCER_ADDR
