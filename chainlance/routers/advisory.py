# chainlance/routers/advisory.py
from fastapi import APIRouter, Depends, HTTPException

from advisory.client import AdvisoryError
from chainlance.models.session import DescriptionRequest
from chainlance.routers.deps import get_session
from chainlance.services.session import SessionState

router = APIRouter()


@router.post("/advisory/description")
async def generate_description(request: DescriptionRequest, session: SessionState = Depends(get_session)):
    """Polish a rough job request before it goes into the posting form."""
    if not request.prompt.strip():
        raise HTTPException(status_code=422, detail="Prompt must not be empty")
    try:
        description = session.advisory.generate_job_description(request.prompt)
    except AdvisoryError:
        raise HTTPException(status_code=502, detail="Description generation failed.")
    return {"description": description}


@router.get("/advisory/escrow")
async def explain_escrow(session: SessionState = Depends(get_session)):
    try:
        explanation = session.advisory.explain_escrow()
    except AdvisoryError:
        raise HTTPException(status_code=502, detail="Explanation unavailable.")
    return {"explanation": explanation}
