"""
Job Posting Service

Organizations post jobs; everyone browses them. Postings are never removed
from the collection: DELETE flips is_active and listings filter on it.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from talentlink.core.errors import NotFoundError, ValidationError, remote_call
from talentlink.services.mongo_service import CollectionService, serialize_doc, utcnow
from talentlink.utils.listing import filter_search

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "company", "description", "requirements")
FILTER_FIELDS = ("company", "location", "job_type", "work_mode")
SEARCH_FIELDS = ("title", "description", "requirements", "company")


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class JobService(CollectionService):
    collection_name = "jobs"
    owner_field = "organization_id"
    label = "Job"
    plural = "job postings"

    def create(self, data: Dict[str, Any], organization_id: str) -> dict:
        """
        Create a job posting.

        Args:
            data: title, company, description, requirements (required)
                  plus optional salary, location, job_type, work_mode,
                  application_email, application_url, deadline
            organization_id: uid of the posting organization
        """
        if any(_blank(data.get(field)) for field in REQUIRED_FIELDS):
            raise ValidationError(
                "Missing required fields: title, company, description, and requirements are required"
            )
        if not organization_id:
            raise ValidationError("Organization ID is required")

        now = utcnow()
        doc = {
            "title": data["title"].strip(),
            "company": data["company"].strip(),
            "description": data["description"],
            "requirements": data["requirements"],
            "salary": data.get("salary") or "",
            "location": data.get("location") or "",
            "job_type": data.get("job_type") or "Full-time",
            "work_mode": data.get("work_mode") or "On-site",
            "application_email": data.get("application_email") or "",
            "application_url": data.get("application_url") or "",
            "deadline": data.get("deadline") or "",
            "organization_id": organization_id,
            "created_at": now,
            "updated_at": now,
            "is_active": True,
            "applications_count": 0,
            "views": 0,
        }
        with remote_call("Failed to create job posting"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Job %s posted by %s", result.inserted_id, organization_id)
        return serialize_doc(doc)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """Active postings matching exact-value filters, newest first."""
        filters = filters or {}
        query: Dict[str, Any] = {"is_active": True}
        for field in FILTER_FIELDS:
            if filters.get(field):
                query[field] = filters[field]

        with remote_call("Failed to fetch job postings"):
            return self._find_sorted(query, filters.get("limit"))

    def list_by_organization(self, organization_id: str) -> List[dict]:
        return self.list_by_owner(organization_id)

    def update(self, job_id: str, data: Dict[str, Any], organization_id: str) -> dict:
        """Update an organization's own posting. None values are left untouched."""
        doc = self._get_owned(job_id, organization_id, "update")
        changes = {key: value for key, value in data.items() if value is not None}
        if any(field in changes and _blank(changes[field]) for field in REQUIRED_FIELDS):
            raise ValidationError("title, company, description, and requirements cannot be empty")
        changes["updated_at"] = utcnow()

        with remote_call("Failed to update job posting"):
            updated = self.collection.find_one_and_update(
                {"_id": doc["_id"]},
                {"$set": changes},
                return_document=ReturnDocument.AFTER
            )
        if updated is None:
            raise NotFoundError("Job not found")
        return serialize_doc(updated)

    def statistics(self, organization_id: str) -> Dict[str, Any]:
        jobs = self.list_by_organization(organization_id)
        return {
            "total_jobs": len(jobs),
            "active_jobs": sum(1 for job in jobs if job.get("is_active")),
            "total_views": sum(job.get("views") or 0 for job in jobs),
            "total_applications": sum(job.get("applications_count") or 0 for job in jobs),
            "recent_jobs": jobs[:5],
        }

    def search(self, term: str, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """Case-insensitive search over title, description, requirements and company."""
        return filter_search(self.list(filters), term, SEARCH_FIELDS)


def get_job_service() -> JobService:
    return JobService()
