# chainlance/services/visibility.py
from typing import Iterable, List, Optional

from advisory.client import is_recommended
from chainlance.models.project import Project, ProjectStatus
from chainlance.models.session import ProjectActions, ProjectView, UserRole
from chainlance.utils.helpers import short_address


def is_owner(project: Project, account: Optional[str]) -> bool:
    """A client owns a project posted under its full or shortened address."""
    if not account:
        return False
    return project.client_name in (account, short_address(account))


def is_visible(project: Project, role: UserRole, account: Optional[str]) -> bool:
    if role == UserRole.CLIENT:
        return is_owner(project, account)
    if project.status in (ProjectStatus.OPEN, ProjectStatus.FUNDED):
        return True
    return bool(account) and (project.hired_freelancer_id == account or project.has_applied(account))


def visible_projects(projects: Iterable[Project], role: UserRole, account: Optional[str]) -> List[Project]:
    return [p for p in projects if is_visible(p, role, account)]


def permissions(project: Project, role: UserRole, account: Optional[str]) -> ProjectActions:
    """
    Work out which actions the current viewer may take on a project.

    Args:
        project (Project): The project being rendered.
        role (UserRole): Active role of the session.
        account (Optional[str]): Connected wallet address, if any.

    Returns:
        ProjectActions: Flags the front end uses to show or hide controls.
    """
    status = project.status
    owner = is_owner(project, account)
    hired = bool(account) and project.hired_freelancer_id == account
    applied = project.has_applied(account)
    recommended = is_recommended(project.submission_audit)

    as_client = role == UserRole.CLIENT and owner
    as_freelancer = role == UserRole.FREELANCER and bool(account)
    reviewable = as_client and project.accepts_proposals and len(project.proposals) > 0

    return ProjectActions(
        has_applied=applied,
        is_owner=owner,
        is_hired=hired,
        is_recommended=recommended,
        can_fund=as_client and status == ProjectStatus.OPEN,
        can_apply=as_freelancer and project.accepts_proposals and not applied,
        can_review_proposals=reviewable,
        can_accept=reviewable,
        can_submit_work=as_freelancer and hired and status == ProjectStatus.IN_PROGRESS,
        can_release=as_client and status == ProjectStatus.IN_PROGRESS and recommended,
    )


def project_views(projects: Iterable[Project], role: UserRole, account: Optional[str]) -> List[ProjectView]:
    return [
        ProjectView(project=p, actions=permissions(p, role, account))
        for p in visible_projects(projects, role, account)
    ]
