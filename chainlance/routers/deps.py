# chainlance/routers/deps.py
from fastapi import HTTPException, Request

from chainlance.models.project import Project
from chainlance.services.session import SessionState


def get_session(request: Request) -> SessionState:
    return request.app.state.session


def require_account(session: SessionState) -> str:
    if not session.account:
        raise HTTPException(status_code=401, detail="Connect a wallet first")
    return session.account


def require_project(session: SessionState, project_id: str) -> Project:
    project = session.store.get(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project
