# chainlance/models/session.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from chainlance.models.project import Project


class UserRole(str, Enum):
    CLIENT = "CLIENT"
    FREELANCER = "FREELANCER"


class RoleUpdate(BaseModel):
    role: UserRole


class SessionInfo(BaseModel):
    role: UserRole
    account: Optional[str] = None
    short_account: Optional[str] = None
    wallet_available: bool
    install_url: Optional[str] = None


class WalletConnectRequest(BaseModel):
    # Key the demo wallet should approve; omitted when the wallet already trusts the site
    public_key: Optional[str] = None


class AccountSwitch(BaseModel):
    public_key: Optional[str] = None


class ProjectActions(BaseModel):
    has_applied: bool = False
    is_owner: bool = False
    is_hired: bool = False
    is_recommended: bool = False
    can_fund: bool = False
    can_apply: bool = False
    can_review_proposals: bool = False
    can_accept: bool = False
    can_submit_work: bool = False
    can_release: bool = False


class ProjectView(BaseModel):
    project: Project
    actions: ProjectActions


class ProjectList(BaseModel):
    role: UserRole
    account: Optional[str] = None
    projects: List[ProjectView]


class PoolStats(BaseModel):
    total_value_locked: float
    project_count: int


class WorkSubmission(BaseModel):
    url: str


class DescriptionRequest(BaseModel):
    prompt: str
