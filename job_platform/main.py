"""
Job Posting Platform - Main Application

FastAPI backend with:
- MongoDB for employers, jobs and applications
- JWT authentication for employers
- WebSocket channel (/ws) for real-time application notifications

Run: uvicorn job_platform.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from job_platform.api.routes import api_router, realtime_router
from job_platform.core.config import get_settings
from job_platform.core.errors import register_exception_handlers
from job_platform.core.logging import get_logger
from job_platform.db.mongodb import init_mongo_indexes, test_mongo_connection
from job_platform.services.notifications import ConnectionManager, NotificationDispatcher
from job_platform.services.presence import PresenceRegistry

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize MongoDB indexes on startup, flush notifications on shutdown."""
    if settings.init_indexes:
        try:
            init_mongo_indexes()
        except Exception as e:
            logger.warning("MongoDB index initialization failed: %s", e)
    yield
    await app.state.dispatcher.drain()


# Create FastAPI app
app = FastAPI(
    title="Job Posting API",
    description="""
    A Job Posting and Management API for employers and candidates.

    ## Features
    - **Authentication**: Employer registration and JWT login
    - **Jobs**: Post, search, update and delete job postings
    - **Applications**: Candidates apply without an account
    - **Real-time**: Employers connected on `/ws` are notified of new applications
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Presence + channels live for the whole process and are shared by
# the HTTP handlers and the /ws endpoint
app.state.presence = PresenceRegistry()
app.state.connections = ConnectionManager()
app.state.dispatcher = NotificationDispatcher(app.state.presence, app.state.connections)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(realtime_router)


@app.get("/", tags=["Frontend"], response_class=HTMLResponse)
async def welcome():
    """Welcome page pointing at the API docs."""
    return """
    <h1>Welcome to the Job Posting API!</h1>
    <p>View the API documentation: <a href="/docs">Swagger Docs</a></p>
    """


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected",
        "connectedEmployers": len(app.state.presence)
    }
