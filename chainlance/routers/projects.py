# chainlance/routers/projects.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from advisory.client import AdvisoryError
from chainlance.models.project import Project, ProjectCreate, Proposal
from chainlance.models.session import ProjectList, ProjectView, UserRole, WorkSubmission
from chainlance.models.transaction import Transaction
from chainlance.routers.deps import get_session, require_account, require_project
from chainlance.services.session import SessionState
from chainlance.services.store import TransitionError, ValidationFailed
from chainlance.services.visibility import permissions, project_views
from chainlance.utils.helpers import encode_data_url

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(result):
    if result is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return result


def _view(session: SessionState, project: Project) -> ProjectView:
    return ProjectView(project=project, actions=permissions(project, session.role, session.account))


@router.get("/projects", response_model=ProjectList)
async def list_projects(session: SessionState = Depends(get_session)):
    return ProjectList(
        role=session.role,
        account=session.account,
        projects=project_views(session.store.projects, session.role, session.account),
    )


@router.post("/projects", response_model=ProjectView, status_code=201)
async def create_project(draft: ProjectCreate, session: SessionState = Depends(get_session)):
    account = require_account(session)
    project = session.store.create_project(draft, account)
    return _view(session, project)


@router.post("/projects/{project_id}/fund", response_model=Transaction)
async def fund_project(project_id: str, session: SessionState = Depends(get_session)):
    account = require_account(session)
    project = require_project(session, project_id)
    if not permissions(project, session.role, account).can_fund:
        raise HTTPException(status_code=403, detail="Only the owning client can fund an open project")
    try:
        tx = session.store.fund(project_id, account)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _not_found(tx)


@router.get("/projects/{project_id}/proposals", response_model=List[Proposal])
async def list_proposals(project_id: str, session: SessionState = Depends(get_session)):
    account = require_account(session)
    project = require_project(session, project_id)
    if session.role != UserRole.CLIENT or not permissions(project, session.role, account).is_owner:
        raise HTTPException(status_code=403, detail="Only the owning client can review applicants")
    return project.proposals


@router.post("/projects/{project_id}/proposals", response_model=Proposal, status_code=201)
async def submit_proposal(
    project_id: str,
    message: str = Form(""),
    resume: Optional[UploadFile] = File(None),
    session: SessionState = Depends(get_session),
):
    account = require_account(session)
    project = require_project(session, project_id)
    if not message.strip():
        raise HTTPException(status_code=422, detail="Proposal message must not be empty")
    actions = permissions(project, session.role, account)
    if actions.has_applied:
        raise HTTPException(status_code=409, detail="Proposal already received")
    if not actions.can_apply:
        raise HTTPException(status_code=403, detail="This project is not accepting your application")

    resume_base64 = None
    if resume is not None and resume.filename:
        content = await resume.read()
        if content:
            resume_base64 = encode_data_url(content, resume.content_type)

    try:
        proposal = session.store.submit_proposal(project_id, account, message, resume_base64)
    except ValidationFailed as e:
        raise HTTPException(status_code=422, detail=str(e))
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AdvisoryError:
        raise HTTPException(status_code=502, detail="Application failed.")
    return _not_found(proposal)


@router.post("/projects/{project_id}/proposals/{proposal_id}/accept", response_model=ProjectView)
async def accept_proposal(project_id: str, proposal_id: str, session: SessionState = Depends(get_session)):
    account = require_account(session)
    project = require_project(session, project_id)
    if not permissions(project, session.role, account).can_accept:
        raise HTTPException(status_code=403, detail="Only the owning client can hire for this project")
    if not project.find_proposal(proposal_id):
        raise HTTPException(status_code=404, detail="Proposal not found")
    try:
        updated = session.store.accept_proposal(project_id, proposal_id)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AdvisoryError:
        raise HTTPException(status_code=502, detail="Hiring failed.")
    return _view(session, _not_found(updated))


@router.post("/projects/{project_id}/submission", response_model=ProjectView)
async def submit_work(project_id: str, submission: WorkSubmission, session: SessionState = Depends(get_session)):
    account = require_account(session)
    project = require_project(session, project_id)
    if not permissions(project, session.role, account).can_submit_work:
        raise HTTPException(status_code=403, detail="Only the hired freelancer can submit work")
    try:
        updated = session.store.submit_work(project_id, submission.url)
    except ValidationFailed as e:
        raise HTTPException(status_code=422, detail=str(e))
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AdvisoryError:
        raise HTTPException(status_code=502, detail="Submission audit failed.")
    return _view(session, _not_found(updated))


@router.post("/projects/{project_id}/release", response_model=Transaction)
async def release_funds(project_id: str, session: SessionState = Depends(get_session)):
    account = require_account(session)
    project = require_project(session, project_id)
    if not permissions(project, session.role, account).can_release:
        raise HTTPException(status_code=403, detail="Payment can only be released by the owner after a favorable audit")
    try:
        tx = session.store.release(project_id)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _not_found(tx)
