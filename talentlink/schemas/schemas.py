"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Union
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    user = "user"
    mentor = "mentor"
    organization = "organization"


class JobType(str, Enum):
    full_time = "Full-time"
    part_time = "Part-time"
    internship = "Internship"
    contract = "Contract"


class WorkMode(str, Enum):
    on_site = "On-site"
    remote = "Remote"
    hybrid = "Hybrid"


class CourseLevel(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"


class CourseType(str, Enum):
    online = "Online"
    offline = "Offline"
    hybrid = "Hybrid"


# Comma separated text ("a, b") or a list of strings
StringList = Union[List[str], str]


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    uid: str
    role: str
    is_new_user: bool = False
    redirect_path: str

class UserResponse(BaseModel):
    uid: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    role: str
    profile_complete: bool = False
    profile_completion_percentage: int = 0
    profile: Dict[str, Union[List[str], str, None]] = {}
    created_at: datetime
    last_updated: Optional[datetime] = None


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    """
    Profile form submission. Only fields that belong to the caller's role
    may be set; list fields accept comma separated text.
    """
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    # user
    skills: Optional[StringList] = None
    interests: Optional[StringList] = None
    education: Optional[str] = None
    # user + mentor
    experience: Optional[str] = None
    # mentor
    expertise: Optional[StringList] = None
    mentorship_areas: Optional[StringList] = None
    bio: Optional[str] = None
    availability: Optional[str] = None
    linkedin_url: Optional[str] = None
    # organization
    organization_name: Optional[str] = None
    organization_type: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

class CompletionStatus(BaseModel):
    is_complete: bool
    completion_percentage: int = Field(..., ge=0, le=100)
    missing_fields: List[str] = []
    completed_fields: List[str] = []
    next_step: str

class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserResponse
    completion_status: CompletionStatus


# ============================================================
# MENTOR SCHEMAS
# ============================================================

class Requirement(BaseModel):
    met: bool
    label: str
    description: str

class UnmetRequirement(BaseModel):
    key: str
    label: str
    description: str

class MentorEligibility(BaseModel):
    is_eligible: bool
    requirements: Dict[str, Requirement]
    unmet_requirements: List[UnmetRequirement] = []
    completion_percentage: int = 0

class VisibilityAction(BaseModel):
    key: str
    label: str
    description: str
    urgent: bool = False

class VisibilityMessage(BaseModel):
    type: str
    title: str
    description: str
    actions: List[VisibilityAction] = []
    completion_percentage: Optional[int] = None

class MentorSummary(BaseModel):
    name: str
    role: str
    email: Optional[str] = None

class MentorRequirements(MentorEligibility):
    profile_status: CompletionStatus
    mentor: MentorSummary

class MentorRequirementsResponse(BaseModel):
    requirements: MentorRequirements
    message: VisibilityMessage

class MentorResponse(BaseModel):
    id: str
    name: str
    email: str = ""
    expertise: List[str] = []
    mentorship_areas: List[str] = []
    experience: str = ""
    bio: str = ""
    availability: str = ""
    linkedin_url: str = ""
    profile_complete: bool = False
    profile_completion_percentage: int = 0
    photo_url: str = ""
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

class MentorListResponse(BaseModel):
    mentors: List[MentorResponse]
    has_more: bool = False
    total: int

class MentorStatsResponse(BaseModel):
    total_mentors: int
    qualified_mentors: int
    qualification_rate: int


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    salary: str = ""
    location: str = ""
    job_type: JobType = JobType.full_time
    work_mode: WorkMode = WorkMode.on_site
    application_email: str = ""
    application_url: str = ""
    deadline: str = ""

class JobUpdate(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    salary: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    work_mode: Optional[WorkMode] = None
    application_email: Optional[str] = None
    application_url: Optional[str] = None
    deadline: Optional[str] = None

class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    description: str
    requirements: str
    salary: str = ""
    location: str = ""
    job_type: str
    work_mode: str
    application_email: str = ""
    application_url: str = ""
    deadline: str = ""
    organization_id: str
    is_active: bool = True
    applications_count: int = 0
    views: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    page: int
    page_size: int

class JobStatsResponse(BaseModel):
    total_jobs: int
    active_jobs: int
    total_views: int
    total_applications: int
    recent_jobs: List[JobResponse] = []


# ============================================================
# COURSE SCHEMAS
# ============================================================

class CourseCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    objectives: Optional[str] = None
    price: Optional[Union[float, str]] = None
    currency: str = "USD"
    duration: str = ""
    level: CourseLevel = CourseLevel.beginner
    category: str = "General"
    tags: List[str] = []
    prerequisites: str = ""
    max_students: int = Field(0, ge=0)
    course_type: CourseType = CourseType.online
    language: str = "English"
    certificate_offered: bool = False

class CourseUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    objectives: Optional[str] = None
    price: Optional[Union[float, str]] = None
    currency: Optional[str] = None
    duration: Optional[str] = None
    level: Optional[CourseLevel] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    prerequisites: Optional[str] = None
    max_students: Optional[int] = Field(None, ge=0)
    course_type: Optional[CourseType] = None
    language: Optional[str] = None
    certificate_offered: Optional[bool] = None

class CourseResponse(BaseModel):
    id: str
    title: str
    description: str
    objectives: str
    price: float
    currency: str
    duration: str = ""
    level: str
    category: str
    tags: List[str] = []
    prerequisites: str = ""
    max_students: int = 0
    course_type: str
    language: str
    certificate_offered: bool = False
    mentor_id: str
    is_active: bool = True
    enrolled_count: int = 0
    rating: float = 0
    total_ratings: int = 0
    views: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

class CourseListResponse(BaseModel):
    courses: List[CourseResponse]
    total: int
    page: int
    page_size: int

class CourseStatsResponse(BaseModel):
    total_courses: int
    active_courses: int
    total_enrollments: int
    total_views: int
    total_revenue: float
    average_rating: float
    recent_courses: List[CourseResponse] = []


# ============================================================
# POST SCHEMAS
# ============================================================

class PostCreate(BaseModel):
    content: Optional[str] = None

class PostUpdate(BaseModel):
    content: Optional[str] = None

class CommentCreate(BaseModel):
    text: Optional[str] = None

class CommentResponse(BaseModel):
    id: str
    author: str
    author_id: str
    text: str
    created_at: datetime

class PostResponse(BaseModel):
    id: str
    content: str
    author: str
    author_id: str
    role: str
    hashtags: List[str] = []
    mentions: List[str] = []
    likes: List[str] = []
    like_count: int = 0
    comments: List[CommentResponse] = []
    comment_count: int = 0
    is_edited: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None

class PostListResponse(BaseModel):
    posts: List[PostResponse]
    total: int

class LikeResponse(BaseModel):
    post_id: str
    liked: bool
    like_count: int

class PostStatsResponse(BaseModel):
    total_posts: int
    total_likes: int
    total_comments: int
    engagement_rate: float
    recent_posts: List[PostResponse] = []


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
