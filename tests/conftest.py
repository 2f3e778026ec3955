"""
ChainLance Test Configuration

Shared fixtures for all tests.
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from advisory.client import AdvisoryError
from chainlance.app import create_app
from chainlance.models.project import Category, ProjectCreate
from chainlance.services.session import SessionState
from chainlance.services.storage import FileStorage
from chainlance.services.store import ProjectStore
from chainlance.services.wallet import DemoWalletProvider, WalletAdapter

CLIENT_ADDR = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
FREELANCER_ADDR = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
OTHER_ADDR = "HN7cABqLq46Es1jh92dQQisAq662SmxELLLsHHe4YWrH"
STORAGE_KEY = "chainlance_job_pool_v3"
TODAY = date(2026, 1, 10)

APPROVED_AUDIT = "Verdict: RECOMMENDED FOR PAYMENT\n1. Clear structure\n2. Tests included"
REJECTED_AUDIT = "Verdict: REVISIONS NEEDED\n1. Repository is empty\n2. No README"


class FakeAdvisory:
    """Stands in for AdvisoryClient; records calls and can be told to fail."""

    def __init__(self):
        self.deadline_days = 7
        self.audit = APPROVED_AUDIT
        self.resume_analysis = "Match Score: 85\nStrengths: React, Node, Testing"
        self.description = "We are looking for an experienced developer..."
        self.fail = False
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail:
            raise AdvisoryError("service unavailable")

    def generate_job_description(self, prompt):
        self._record("generate_job_description", prompt)
        return self.description

    def analyze_resume(self, job_description, resume_base64):
        self._record("analyze_resume", job_description, resume_base64)
        return self.resume_analysis

    def estimate_deadline(self, job_description, proposal_message):
        self._record("estimate_deadline", job_description, proposal_message)
        return self.deadline_days

    def audit_submission(self, job_description, url):
        self._record("audit_submission", job_description, url)
        return self.audit

    def explain_escrow(self):
        self._record("explain_escrow")
        return "Funds are held until the work is approved."


@pytest.fixture
def advisory():
    return FakeAdvisory()


@pytest.fixture
def storage(tmp_path):
    return FileStorage(str(tmp_path / "storage"))


@pytest.fixture
def store(storage, advisory):
    return ProjectStore(storage, STORAGE_KEY, advisory, today=lambda: TODAY)


@pytest.fixture
def draft():
    return ProjectCreate(
        title="Build landing page",
        description="A responsive landing page for a wallet app",
        budget="2.5",
        category=Category.DEVELOPMENT,
        skills="React, Tailwind, ",
    )


@pytest.fixture
def wallet_provider():
    return DemoWalletProvider(CLIENT_ADDR, trusted=True)


@pytest.fixture
def session(store, wallet_provider, advisory):
    return SessionState(store, WalletAdapter(wallet_provider), advisory)


@pytest.fixture
def client(session):
    """Create test client around a wired session."""
    with TestClient(create_app(session)) as c:
        yield c
