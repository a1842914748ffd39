import httpx
import pytest

from talentlink.client.api_client import TalentLinkClient
from talentlink.client.interactions import LikeToggle
from talentlink.core.errors import (
    AuthenticationError, InvalidRoleError, NotFoundError, PermissionDeniedError,
    RemoteFailure, ValidationError
)


def client_for(handler, token="tok"):
    return TalentLinkClient(
        base_url="http://testserver/api", token=token, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_sends_bearer_token_and_decodes_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"post_id": "p1", "liked": True, "like_count": 2})

    async with client_for(handler) as client:
        result = await client.add_like("p1")

    assert result["like_count"] == 2
    assert seen == {"path": "/api/posts/p1/like", "auth": "Bearer tok"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status, body, error", [
    (403, {"detail": "User is not registered as a mentor", "code": "invalid_role"}, InvalidRoleError),
    (403, {"detail": "Unauthorized", "code": "permission_denied"}, PermissionDeniedError),
    (404, {"detail": "Post not found"}, NotFoundError),
    (400, {"detail": "Comment text is required"}, ValidationError),
    (401, {"detail": "Not authenticated"}, AuthenticationError),
    (500, {"detail": "boom"}, RemoteFailure),
])
async def test_error_responses_map_to_error_types(status, body, error):
    def handler(request):
        return httpx.Response(status, json=body)

    async with client_for(handler) as client:
        with pytest.raises(error) as exc_info:
            await client.get_mentor_requirements()
    assert exc_info.value.detail == body["detail"]


@pytest.mark.asyncio
async def test_transport_error_is_remote_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(RemoteFailure):
            await client.remove_like("p1")


@pytest.mark.asyncio
async def test_non_json_error_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    async with client_for(handler) as client:
        with pytest.raises(RemoteFailure, match="status 502"):
            await client.get_completion()


@pytest.mark.asyncio
async def test_non_json_success_body_is_remote_failure():
    def handler(request):
        return httpx.Response(200, text="<html>proxy</html>")

    async with client_for(handler) as client:
        with pytest.raises(RemoteFailure, match="unreadable"):
            await client.add_like("p1")


@pytest.mark.asyncio
async def test_like_toggle_rolls_back_on_unreadable_response():
    def handler(request):
        return httpx.Response(200, text="<html>proxy</html>")

    async with client_for(handler) as client:
        toggle = LikeToggle("p1", "viewer", liked=False, like_count=3, remote=client)
        with pytest.raises(RemoteFailure):
            await toggle.toggle()

    assert (toggle.liked, toggle.like_count) == (False, 3)
