"""
TalentLink - Main Application

FastAPI backend with:
- MongoDB for every record (users, jobs, courses, enrollments, posts)
- JWT authentication with role portals (user, mentor, organization)
- Mentor directory gated on a valid LinkedIn profile

Run: uvicorn talentlink.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from talentlink.api import api_router
from talentlink.core.config import get_settings
from talentlink.core.errors import TalentLinkError
from talentlink.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="TalentLink",
    description="""
    Career marketplace connecting users, mentors and organizations.

    ## Features
    - **Authentication**: JWT-based auth with one login portal per role
    - **Profiles**: Role-specific profiles with completion tracking
    - **Mentors**: Directory of mentors with a verified LinkedIn profile
    - **Jobs**: Organizations post jobs; search, filter and browse
    - **Courses**: Mentors publish courses; users enroll
    - **Posts**: Social feed with likes and comments
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TalentLinkError)
async def talentlink_error_handler(request: Request, exc: TalentLinkError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "TalentLink"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
