"""
TalentLink API client.

Wraps httpx.AsyncClient. Every call either returns the decoded JSON body or
raises a talentlink.core.errors type:
- transport problems (connect, timeout) -> RemoteFailure
- error responses -> the error named by the body's "code", falling back to
  the HTTP status
"""
import logging
from typing import Any, Optional

import httpx

from talentlink.core.config import get_settings
from talentlink.core.errors import (
    ERRORS_BY_CODE, AuthenticationError, NotFoundError, PermissionDeniedError,
    RemoteFailure, TalentLinkError, ValidationError
)

logger = logging.getLogger(__name__)
settings = get_settings()

ERRORS_BY_STATUS = {
    400: ValidationError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    422: ValidationError,
}


def error_from_response(resp: httpx.Response) -> TalentLinkError:
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    detail = body.get("detail")
    if not isinstance(detail, str):
        detail = f"Request failed with status {resp.status_code}"

    cls = ERRORS_BY_CODE.get(body.get("code")) or ERRORS_BY_STATUS.get(resp.status_code, RemoteFailure)
    return cls(detail)


class TalentLinkClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url or settings.api_base_url
        self.token = token
        self.timeout = timeout or settings.client_timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        self._http = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout,
            headers=headers, transport=self._transport
        )

    async def stop(self) -> None:
        if self._http:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "TalentLinkClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        if self._http is None:
            await self.start()
        try:
            resp = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise RemoteFailure(f"Could not reach TalentLink: {exc}") from exc

        if resp.is_error:
            raise error_from_response(resp)
        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body", method, path)
            raise RemoteFailure("TalentLink returned an unreadable response") from exc

    # ---- auth -------------------------------------------------------

    async def login(self, email: str, password: str, role: str) -> dict:
        """Login and use the returned token for every later call."""
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password, "role": role})
        self.token = data["access_token"]
        if self._http is not None:
            self._http.headers["Authorization"] = f"Bearer {self.token}"
        return data

    # ---- posts ------------------------------------------------------

    async def list_posts(self, **filters) -> dict:
        params = {key: value for key, value in filters.items() if value is not None}
        return await self._request("GET", "/posts", params=params)

    async def add_like(self, post_id: str) -> dict:
        """Returns {"post_id", "liked", "like_count"} as stored on the server."""
        return await self._request("POST", f"/posts/{post_id}/like")

    async def remove_like(self, post_id: str) -> dict:
        return await self._request("DELETE", f"/posts/{post_id}/like")

    async def add_comment(self, post_id: str, text: str) -> dict:
        """Returns the stored comment with its server id and timestamp."""
        return await self._request("POST", f"/posts/{post_id}/comments", json={"text": text})

    # ---- profile / mentors -----------------------------------------

    async def get_completion(self, uid: Optional[str] = None) -> dict:
        path = f"/profile/{uid}/completion" if uid else "/profile/completion"
        return await self._request("GET", path)

    async def get_mentor_requirements(self) -> dict:
        """Own visibility requirements; {"requirements": ..., "message": ...}."""
        return await self._request("GET", "/mentors/me/requirements")

    async def list_mentors(self, page_size: int = 20) -> dict:
        return await self._request("GET", "/mentors", params={"page_size": page_size})
