"""
TalentLink
Career marketplace backend: users, mentors and organizations.

Architecture:
- MongoDB: every record (users, jobs, courses, enrollments, posts)
- FastAPI: HTTP API under /api
- talentlink.client: async client library for the browser-side behaviours
  (optimistic likes, comment threads, cancellable profile fetches)
"""

__version__ = "1.0.0"
