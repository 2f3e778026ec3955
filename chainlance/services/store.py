# chainlance/services/store.py
import json
import logging
from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from advisory.client import AdvisoryClient
from chainlance.models.project import (
    CompletedPhase,
    FundedPhase,
    InProgressPhase,
    Project,
    ProjectCreate,
    ProjectStatus,
    Proposal,
    Submission,
    SubmissionStatus,
)
from chainlance.models.transaction import Transaction
from chainlance.services.ledger import Ledger
from chainlance.services.storage import LocalStorage
from chainlance.utils.helpers import generate_project_id, generate_proposal_id, short_address

logger = logging.getLogger(__name__)


class ValidationFailed(ValueError):
    """A required field is empty or malformed; nothing was changed."""


class TransitionError(Exception):
    """The project is not in a status that allows the requested action."""


def dump_projects(projects: Iterable[Project]) -> str:
    return json.dumps([p.model_dump(mode="json") for p in projects])


def load_projects(text: Optional[str]) -> List[Project]:
    """
    Parse a stored job pool snapshot.

    Args:
        text (Optional[str]): JSON array written by dump_projects, or None.

    Returns:
        List[Project]: Projects in stored order; empty when nothing is stored.

    Raises:
        ValueError: The stored value is not a valid snapshot.
    """
    if not text:
        return []
    return [Project.model_validate(item) for item in json.loads(text)]


class ProjectStore:
    """Owns the job pool and every lifecycle mutation.

    Each mutation builds a new snapshot, swaps it in and persists the whole
    snapshot. Advisory calls are awaited before anything is changed, so a
    failed call leaves the pool untouched. Unknown project ids are ignored
    and the method returns None.
    """

    def __init__(self, storage: LocalStorage, storage_key: str, advisory: AdvisoryClient,
                 ledger: Optional[Ledger] = None, today: Callable[[], date] = date.today):
        self.storage = storage
        self.storage_key = storage_key
        self.advisory = advisory
        self.ledger = ledger if ledger is not None else Ledger()
        self._today = today
        self._projects: Tuple[Project, ...] = tuple(load_projects(storage.get_item(storage_key)))
        logger.info(f"Loaded {len(self._projects)} projects from storage")

    @property
    def projects(self) -> List[Project]:
        return list(self._projects)

    def total_value_locked(self) -> float:
        """Sum of budgets across the whole job pool, in any status."""
        return sum(p.budget for p in self._projects)

    def get(self, project_id: str) -> Optional[Project]:
        return next((p for p in self._projects if p.id == project_id), None)

    def _commit(self, projects: Iterable[Project]) -> None:
        self._projects = tuple(projects)
        self.storage.set_item(self.storage_key, dump_projects(self._projects))

    def _replace(self, updated: Project) -> Project:
        self._commit(updated if p.id == updated.id else p for p in self._projects)
        return updated

    @staticmethod
    def _require_status(project: Project, *allowed: ProjectStatus) -> None:
        if project.status not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise TransitionError(f"Project {project.id} is {project.status.value}, expected {names}")

    def create_project(self, draft: ProjectCreate, client_address: str) -> Project:
        if not client_address:
            raise ValidationFailed("A connected wallet is required")
        project = Project(
            id=generate_project_id(),
            title=draft.title,
            description=draft.description,
            budget=draft.budget,
            category=draft.category,
            client_name=short_address(client_address),
            skills=draft.skill_list(),
        )
        self._commit((project,) + self._projects)
        logger.info(f"Created project {project.id} ({project.title!r}, budget {project.budget})")
        return project

    def fund(self, project_id: str, payer: str) -> Optional[Transaction]:
        project = self.get(project_id)
        if not project:
            return None
        self._require_status(project, ProjectStatus.OPEN)
        tx = self.ledger.record_deposit(project.budget, payer)
        self._replace(project.model_copy(update={"phase": FundedPhase()}))
        logger.info(f"Project {project_id} funded")
        return tx

    def submit_proposal(self, project_id: str, freelancer_id: str, message: str,
                        resume_base64: Optional[str] = None) -> Optional[Proposal]:
        message = (message or "").strip()
        if not message:
            raise ValidationFailed("Proposal message must not be empty")
        if not freelancer_id:
            raise ValidationFailed("A connected wallet is required")
        project = self.get(project_id)
        if not project:
            return None
        self._require_status(project, ProjectStatus.OPEN, ProjectStatus.FUNDED)

        ai_analysis = None
        if resume_base64:
            ai_analysis = self.advisory.analyze_resume(project.description, resume_base64)

        proposal = Proposal(
            id=generate_proposal_id(),
            project_id=project.id,
            freelancer_id=freelancer_id,
            message=message,
            resume_base64=resume_base64 or None,
            ai_analysis=ai_analysis or None,
        )
        self._replace(project.model_copy(update={"proposals": project.proposals + [proposal]}))
        logger.info(f"Proposal {proposal.id} from {freelancer_id} on project {project_id}")
        return proposal

    def accept_proposal(self, project_id: str, proposal_id: str) -> Optional[Project]:
        project = self.get(project_id)
        if not project:
            return None
        proposal = project.find_proposal(proposal_id)
        if not proposal:
            return None
        self._require_status(project, ProjectStatus.OPEN, ProjectStatus.FUNDED)

        days = self.advisory.estimate_deadline(project.description, proposal.message)
        deadline = (self._today() + timedelta(days=days)).isoformat()

        updated = project.model_copy(update={
            "phase": InProgressPhase(hired_freelancer_id=proposal.freelancer_id),
            "deadline": deadline,
        })
        logger.info(f"Project {project_id} hired {proposal.freelancer_id}, due {deadline}")
        return self._replace(updated)

    def submit_work(self, project_id: str, url: str) -> Optional[Project]:
        url = (url or "").strip()
        if not url:
            raise ValidationFailed("Submission link must not be empty")
        project = self.get(project_id)
        if not project:
            return None
        self._require_status(project, ProjectStatus.IN_PROGRESS)

        audit = self.advisory.audit_submission(project.description, url)

        submission = Submission(url=url, audit=audit, status=SubmissionStatus.AUDITED)
        updated = project.model_copy(update={
            "phase": project.phase.model_copy(update={"submission": submission}),
        })
        logger.info(f"Work submitted on project {project_id}: {url}")
        return self._replace(updated)

    def release(self, project_id: str) -> Optional[Transaction]:
        project = self.get(project_id)
        if not project:
            return None
        self._require_status(project, ProjectStatus.IN_PROGRESS)
        tx = self.ledger.record_release(project.budget, project.hired_freelancer_id)
        self._replace(project.model_copy(update={
            "phase": CompletedPhase(
                hired_freelancer_id=project.hired_freelancer_id,
                submission=project.submission,
            ),
        }))
        logger.info(f"Project {project_id} completed, paid {project.hired_freelancer_id}")
        return tx
