"""
Course Posting Service

Mentors publish courses; users enroll in them. Enrollment writes a record
to the enrollments collection and bumps the course's enrolled_count.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from talentlink.core.errors import NotFoundError, ValidationError, remote_call
from talentlink.db.mongodb import get_collection, COLLECTIONS
from talentlink.services.mongo_service import CollectionService, serialize_doc, utcnow
from talentlink.utils.listing import filter_search

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "objectives", "price")
FILTER_FIELDS = ("category", "level", "course_type", "language")
SEARCH_FIELDS = ("title", "description", "objectives", "category", "tags")


def parse_price(value: Any) -> float:
    """Price as a non-negative float ("49.99" -> 49.99)."""
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a number")
    if price < 0:
        raise ValidationError("Price cannot be negative")
    return price


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class CourseService(CollectionService):
    collection_name = "courses"
    owner_field = "mentor_id"
    label = "Course"
    plural = "courses"

    def __init__(self):
        super().__init__()
        self.enrollments = get_collection(COLLECTIONS["enrollments"])

    def create(self, data: Dict[str, Any], mentor_id: str) -> dict:
        if any(_blank(data.get(field)) for field in REQUIRED_FIELDS):
            raise ValidationError(
                "Missing required fields: title, description, objectives, and price are required"
            )
        if not mentor_id:
            raise ValidationError("Mentor ID is required")

        now = utcnow()
        doc = {
            "title": data["title"].strip(),
            "description": data["description"],
            "objectives": data["objectives"],
            "price": parse_price(data["price"]),
            "currency": data.get("currency") or "USD",
            "duration": data.get("duration") or "",
            "level": data.get("level") or "Beginner",
            "category": data.get("category") or "General",
            "tags": list(data.get("tags") or []),
            "prerequisites": data.get("prerequisites") or "",
            "max_students": int(data.get("max_students") or 0),
            "course_type": data.get("course_type") or "Online",
            "language": data.get("language") or "English",
            "certificate_offered": bool(data.get("certificate_offered")),
            "mentor_id": mentor_id,
            "created_at": now,
            "updated_at": now,
            "is_active": True,
            "enrolled_count": 0,
            "rating": 0,
            "total_ratings": 0,
            "views": 0,
        }
        with remote_call("Failed to create course"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Course %s published by %s", result.inserted_id, mentor_id)
        return serialize_doc(doc)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """
        Active courses, newest first.

        Filters: category, level, course_type, language (exact match),
        min_price / max_price (inclusive), limit.
        """
        filters = filters or {}
        query: Dict[str, Any] = {"is_active": True}
        for field in FILTER_FIELDS:
            if filters.get(field):
                query[field] = filters[field]

        price_range = {}
        if filters.get("min_price") is not None:
            price_range["$gte"] = filters["min_price"]
        if filters.get("max_price") is not None:
            price_range["$lte"] = filters["max_price"]
        if price_range:
            query["price"] = price_range

        with remote_call("Failed to fetch courses"):
            return self._find_sorted(query, filters.get("limit"))

    def list_by_mentor(self, mentor_id: str) -> List[dict]:
        return self.list_by_owner(mentor_id)

    def update(self, course_id: str, data: Dict[str, Any], mentor_id: str) -> dict:
        doc = self._get_owned(course_id, mentor_id, "update")
        changes = {key: value for key, value in data.items() if value is not None}
        if any(field in changes and _blank(changes[field]) for field in REQUIRED_FIELDS):
            raise ValidationError("title, description, objectives, and price cannot be empty")
        if "price" in changes:
            changes["price"] = parse_price(changes["price"])
        changes["updated_at"] = utcnow()

        with remote_call("Failed to update course"):
            updated = self.collection.find_one_and_update(
                {"_id": doc["_id"]},
                {"$set": changes},
                return_document=ReturnDocument.AFTER
            )
        if updated is None:
            raise NotFoundError("Course not found")
        return serialize_doc(updated)

    def enroll(self, course_id: str, student_id: str) -> dict:
        """
        Enroll a student.

        Raises:
            NotFoundError: unknown or deactivated course
            ValidationError: course is full, or already enrolled
        """
        course = self._find_raw(course_id)
        if not course.get("is_active", True):
            raise NotFoundError("Course not found")

        enrolled = course.get("enrolled_count") or 0
        max_students = course.get("max_students") or 0
        if max_students > 0 and enrolled >= max_students:
            raise ValidationError("Course is full")

        with remote_call("Failed to enroll in course"):
            if self.enrollments.find_one({"course_id": course_id, "student_id": student_id}):
                raise ValidationError("Already enrolled in this course")

            # seat is taken only while enrolled_count is still below the cap
            seat_query: Dict[str, Any] = {"_id": course["_id"], "is_active": True}
            if max_students > 0:
                seat_query["enrolled_count"] = {"$lt": max_students}
            seat = self.collection.update_one(seat_query, {"$inc": {"enrolled_count": 1}})
            if seat.modified_count == 0:
                raise ValidationError("Course is full")

            enrollment = {
                "course_id": course_id,
                "student_id": student_id,
                "mentor_id": course.get("mentor_id"),
                "enrolled_at": utcnow(),
                "status": "active",
                "progress": 0,
                "completion_date": None,
            }
            try:
                result = self.enrollments.insert_one(enrollment)
            except DuplicateKeyError:
                self.collection.update_one({"_id": course["_id"]}, {"$inc": {"enrolled_count": -1}})
                raise ValidationError("Already enrolled in this course")

        enrollment["_id"] = result.inserted_id
        logger.info("Student %s enrolled in course %s", student_id, course_id)
        return serialize_doc(enrollment)

    def statistics(self, mentor_id: str) -> Dict[str, Any]:
        courses = self.list_by_mentor(mentor_id)
        count = len(courses)
        return {
            "total_courses": count,
            "active_courses": sum(1 for course in courses if course.get("is_active")),
            "total_enrollments": sum(course.get("enrolled_count") or 0 for course in courses),
            "total_views": sum(course.get("views") or 0 for course in courses),
            "total_revenue": sum(
                (course.get("enrolled_count") or 0) * (course.get("price") or 0) for course in courses
            ),
            "average_rating": (
                sum(course.get("rating") or 0 for course in courses) / count if count else 0
            ),
            "recent_courses": courses[:5],
        }

    def search(self, term: str, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """Case-insensitive search over title, description, objectives, category and tags."""
        return filter_search(self.list(filters), term, SEARCH_FIELDS)


def get_course_service() -> CourseService:
    return CourseService()
