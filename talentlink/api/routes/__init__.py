"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from talentlink.api.routes.auth_routes import router as auth_router
from talentlink.api.routes.profile_routes import router as profile_router
from talentlink.api.routes.mentor_routes import router as mentor_router
from talentlink.api.routes.job_routes import router as job_router
from talentlink.api.routes.course_routes import router as course_router
from talentlink.api.routes.post_routes import router as post_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(mentor_router)
api_router.include_router(job_router)
api_router.include_router(course_router)
api_router.include_router(post_router)
