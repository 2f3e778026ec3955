from chainlance.models.project import (
    Category,
    CompletedPhase,
    FundedPhase,
    InProgressPhase,
    OpenPhase,
    Project,
    ProjectCreate,
    ProjectStatus,
    Proposal,
    Submission,
    SubmissionStatus,
    TBD_DEADLINE,
)
from chainlance.models.session import UserRole
from chainlance.models.transaction import Transaction, TransactionStatus, TransactionType

__all__ = [
    "Category",
    "CompletedPhase",
    "FundedPhase",
    "InProgressPhase",
    "OpenPhase",
    "Project",
    "ProjectCreate",
    "ProjectStatus",
    "Proposal",
    "Submission",
    "SubmissionStatus",
    "TBD_DEADLINE",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "UserRole",
]
