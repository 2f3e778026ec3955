# chainlance/models/project.py
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ProjectStatus(str, Enum):
    OPEN = "OPEN"
    FUNDED = "FUNDED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DISPUTED = "DISPUTED"


class Category(str, Enum):
    DEVELOPMENT = "Development"
    DESIGN = "Design"
    CONTENT_WRITING = "Content Writing"
    DIGITAL_MARKETING = "Digital Marketing"
    VIRTUAL_ASSISTANT = "Virtual Assistant"
    VIDEO_ANIMATION = "Video & Animation"
    LEGAL_FINANCE = "Legal & Finance"
    DATA_SCIENCE = "Data Science"
    EDUCATION_TUTORING = "Education & Tutoring"
    TRANSLATION = "Translation"


class SubmissionStatus(str, Enum):
    PENDING = "PENDING"
    AUDITED = "AUDITED"


# Projects are created with this placeholder until a proposal is accepted.
TBD_DEADLINE = "TBD"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class Proposal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    project_id: str
    freelancer_id: str
    message: str
    timestamp: str = Field(default_factory=utc_timestamp)
    resume_base64: Optional[str] = None
    ai_analysis: Optional[str] = None


class Submission(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    audit: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.PENDING


class OpenPhase(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["OPEN"] = "OPEN"


class FundedPhase(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["FUNDED"] = "FUNDED"


class InProgressPhase(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["IN_PROGRESS"] = "IN_PROGRESS"
    hired_freelancer_id: str
    submission: Optional[Submission] = None


class CompletedPhase(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["COMPLETED"] = "COMPLETED"
    hired_freelancer_id: str
    submission: Optional[Submission] = None


Phase = Annotated[
    Union[OpenPhase, FundedPhase, InProgressPhase, CompletedPhase],
    Field(discriminator="status"),
]


class Project(BaseModel):
    """A job posted by a client.

    Lifecycle data lives in ``phase``, a variant tagged by status, so a
    hired freelancer can only exist on IN_PROGRESS and COMPLETED projects.
    The flat accessors below read through to the current phase.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    budget: float
    category: Category
    client_name: str
    deadline: str = TBD_DEADLINE
    skills: List[str] = Field(default_factory=list)
    proposals: List[Proposal] = Field(default_factory=list)
    phase: Phase = Field(default_factory=OpenPhase)

    @computed_field
    @property
    def status(self) -> ProjectStatus:
        return ProjectStatus(self.phase.status)

    @property
    def hired_freelancer_id(self) -> Optional[str]:
        return getattr(self.phase, "hired_freelancer_id", None)

    @property
    def submission(self) -> Optional[Submission]:
        return getattr(self.phase, "submission", None)

    @property
    def submission_url(self) -> Optional[str]:
        return self.submission.url if self.submission else None

    @property
    def submission_audit(self) -> Optional[str]:
        return self.submission.audit if self.submission else None

    @property
    def submission_status(self) -> Optional[SubmissionStatus]:
        return self.submission.status if self.submission else None

    @property
    def accepts_proposals(self) -> bool:
        return self.status in (ProjectStatus.OPEN, ProjectStatus.FUNDED)

    def find_proposal(self, proposal_id: str) -> Optional[Proposal]:
        return next((p for p in self.proposals if p.id == proposal_id), None)

    def has_applied(self, freelancer_id: Optional[str]) -> bool:
        if not freelancer_id:
            return False
        return any(p.freelancer_id == freelancer_id for p in self.proposals)


class ProjectCreate(BaseModel):
    """Draft submitted from the job posting form."""

    title: str
    description: str
    budget: float = Field(ge=0)
    category: Category = Category.DEVELOPMENT
    skills: str = ""

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("budget", mode="before")
    @classmethod
    def _parse_budget(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("budget is required")
        return value

    @field_validator("budget")
    @classmethod
    def _finite_budget(cls, value: float) -> float:
        if math.isnan(value) or math.isinf(value):
            raise ValueError("budget must be a finite number")
        return value

    def skill_list(self) -> List[str]:
        return [s.strip() for s in self.skills.split(",") if s.strip()]
