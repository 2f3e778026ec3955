from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chainlance.config import Config
from chainlance.routers import advisory, projects, session as session_router
from chainlance.services.session import SessionState, create_session
from chainlance.utils.logger import setup_logger

logger = setup_logger(__name__)


def create_app(session: Optional[SessionState] = None) -> FastAPI:
    """
    Build the API around one demo session.

    Args:
        session (Optional[SessionState]): Pre-wired session; built from Config when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = app.state.session
        state.start()
        logger.info("ChainLance session started")
        yield
        state.stop()
        logger.info("ChainLance session stopped")

    app = FastAPI(
        title="ChainLance",
        description="Freelance marketplace demo with simulated escrow and AI advisory",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.session = session if session is not None else create_session()

    # Configure CORS to allow requests from the browser front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[Config.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(session_router.router, prefix="/api")
    app.include_router(projects.router, prefix="/api")
    app.include_router(advisory.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chainlance.app:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
