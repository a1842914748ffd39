"""
Course Routes

POST /courses - Create course (mentor only)
GET /courses - List active courses with filters, search and pagination
GET /courses/mine - Courses of the current mentor
GET /courses/stats - Course statistics for the current mentor
GET /courses/{course_id} - Get course details (counts a view)
PUT /courses/{course_id} - Update course (owning mentor only)
DELETE /courses/{course_id} - Deactivate course (owning mentor only)
POST /courses/{course_id}/enroll - Enroll in course (users only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from talentlink.core.auth import require_role
from talentlink.services.course_service import CourseService, get_course_service
from talentlink.utils.listing import paginate
from talentlink.schemas.schemas import (
    CourseCreate, CourseUpdate, CourseResponse, CourseListResponse, CourseStatsResponse,
    CourseLevel, CourseType, MessageResponse
)

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.post("", response_model=CourseResponse, status_code=201)
async def create_course(
    course: CourseCreate,
    mentor: dict = Depends(require_role("mentor")),
    courses: CourseService = Depends(get_course_service)
):
    """Create a new course. Only mentors can publish courses."""
    return courses.create(course.model_dump(mode="json"), mentor["uid"])


@router.get("", response_model=CourseListResponse)
async def list_courses(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    search: Optional[str] = Query(None, description="Search in title, description, objectives, category, tags"),
    category: Optional[str] = Query(None),
    level: Optional[CourseLevel] = Query(None),
    course_type: Optional[CourseType] = Query(None),
    language: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    courses: CourseService = Depends(get_course_service)
):
    """List active courses with filters and pagination."""
    filters = {
        "category": category,
        "level": level.value if level else None,
        "course_type": course_type.value if course_type else None,
        "language": language,
        "min_price": min_price,
        "max_price": max_price,
        "limit": limit,
    }
    results = courses.search(search, filters) if search else courses.list(filters)
    items, total = paginate(results, page, page_size)

    return CourseListResponse(courses=items, total=total, page=page, page_size=page_size)


@router.get("/mine", response_model=List[CourseResponse])
async def my_courses(
    mentor: dict = Depends(require_role("mentor")),
    courses: CourseService = Depends(get_course_service)
):
    return courses.list_by_mentor(mentor["uid"])


@router.get("/stats", response_model=CourseStatsResponse)
async def course_stats(
    mentor: dict = Depends(require_role("mentor")),
    courses: CourseService = Depends(get_course_service)
):
    return courses.statistics(mentor["uid"])


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(course_id: str, courses: CourseService = Depends(get_course_service)):
    course = courses.get_by_id(course_id, active_only=True)
    courses.increment_views(course_id)
    return course


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: str,
    update: CourseUpdate,
    mentor: dict = Depends(require_role("mentor")),
    courses: CourseService = Depends(get_course_service)
):
    return courses.update(course_id, update.model_dump(mode="json", exclude_unset=True), mentor["uid"])


@router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(
    course_id: str,
    mentor: dict = Depends(require_role("mentor")),
    courses: CourseService = Depends(get_course_service)
):
    courses.soft_delete(course_id, mentor["uid"])
    return MessageResponse(message="Course deleted successfully!")


@router.post("/{course_id}/enroll", response_model=MessageResponse, status_code=201)
async def enroll(
    course_id: str,
    student: dict = Depends(require_role("user")),
    courses: CourseService = Depends(get_course_service)
):
    """Enroll in a course. Cannot enroll twice or into a full course."""
    courses.enroll(course_id, student["uid"])
    return MessageResponse(message="Enrolled in course successfully!")
