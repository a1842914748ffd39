import asyncio
from datetime import datetime, timezone

import pytest

from talentlink.client.interactions import CommentThread, LikeState, LikeToggle
from talentlink.core.errors import NotFoundError, RemoteFailure, ValidationError


class FakeLikeRemote:
    """Server stand-in holding the authoritative likes of one post."""

    def __init__(self, likes=None, fail_with=None):
        self.likes = set(likes or [])
        self.fail_with = fail_with
        self.calls = []
        self.gate = None

    async def _respond(self, post_id, viewer):
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return {"post_id": post_id, "liked": viewer in self.likes, "like_count": len(self.likes)}

    async def add_like(self, post_id):
        self.calls.append(("add", post_id))
        if self.fail_with is None:
            self.likes.add("viewer")
        return await self._respond(post_id, "viewer")

    async def remove_like(self, post_id):
        self.calls.append(("remove", post_id))
        if self.fail_with is None:
            self.likes.discard("viewer")
        return await self._respond(post_id, "viewer")


def make_toggle(remote, liked=False, like_count=3):
    return LikeToggle("post-1", "viewer", liked=liked, like_count=like_count, remote=remote)


@pytest.mark.asyncio
async def test_like_adopts_server_count():
    # server already has 5 other likes; the local count of 3 was stale
    remote = FakeLikeRemote(likes={"a", "b", "c", "d", "e"})
    toggle = make_toggle(remote)

    assert await toggle.toggle() is True
    assert toggle.liked is True
    assert toggle.like_count == 6
    assert toggle.state is LikeState.LIKED


@pytest.mark.asyncio
async def test_unlike():
    remote = FakeLikeRemote(likes={"viewer", "a"})
    toggle = make_toggle(remote, liked=True, like_count=2)

    await toggle.toggle()
    assert toggle.state is LikeState.UNLIKED
    assert toggle.like_count == 1
    assert remote.calls == [("remove", "post-1")]


@pytest.mark.asyncio
async def test_failed_like_restores_exact_previous_state():
    remote = FakeLikeRemote(fail_with=RemoteFailure("network down"))
    toggle = make_toggle(remote, liked=False, like_count=3)

    with pytest.raises(RemoteFailure):
        await toggle.toggle()

    assert (toggle.liked, toggle.like_count) == (False, 3)
    assert toggle.state is LikeState.UNLIKED
    assert not toggle.in_flight


@pytest.mark.asyncio
async def test_server_error_is_reported_as_remote_failure():
    remote = FakeLikeRemote(fail_with=NotFoundError("Post not found"))
    toggle = make_toggle(remote, liked=True, like_count=1)

    with pytest.raises(RemoteFailure, match="Post not found"):
        await toggle.toggle()
    assert (toggle.liked, toggle.like_count) == (True, 1)


@pytest.mark.asyncio
async def test_connection_error_rolls_back_and_becomes_remote_failure():
    remote = FakeLikeRemote(fail_with=ConnectionError("reset by peer"))
    toggle = make_toggle(remote, liked=False, like_count=3)

    with pytest.raises(RemoteFailure, match="reset by peer"):
        await toggle.toggle()

    assert (toggle.liked, toggle.like_count) == (False, 3)
    assert toggle.state is LikeState.UNLIKED
    assert not toggle.in_flight


@pytest.mark.asyncio
async def test_second_toggle_while_in_flight_is_ignored():
    remote = FakeLikeRemote()
    remote.gate = asyncio.Event()
    toggle = make_toggle(remote, liked=False, like_count=0)

    first = asyncio.ensure_future(toggle.toggle())
    await asyncio.sleep(0)

    # optimistic state is visible while the request is pending
    assert toggle.state is LikeState.PENDING_LIKED
    assert toggle.like_count == 1

    assert await toggle.toggle() is False

    remote.gate.set()
    assert await first is True
    assert remote.calls == [("add", "post-1")]
    assert (toggle.liked, toggle.like_count) == (True, 1)


@pytest.mark.asyncio
async def test_no_viewer_is_a_noop():
    remote = FakeLikeRemote()
    toggle = LikeToggle("post-1", None, liked=False, like_count=0, remote=remote)
    assert await toggle.toggle() is False
    assert remote.calls == []


def test_from_post_reads_viewer_like():
    post = {"id": "p", "likes": ["viewer"], "like_count": 4}
    toggle = LikeToggle.from_post(post, "viewer", FakeLikeRemote())
    assert toggle.liked and toggle.like_count == 4
    assert not LikeToggle.from_post(post, "someone-else", FakeLikeRemote()).liked


class FakeCommentRemote:
    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.sent = []

    async def add_comment(self, post_id, text):
        self.sent.append(text)
        if self.fail_with is not None:
            raise self.fail_with
        return {
            "id": "c1",
            "author": "Ada Lovelace",
            "author_id": "viewer",
            "text": text,
            "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc).isoformat(),
        }


@pytest.mark.asyncio
async def test_comment_appends_server_copy():
    remote = FakeCommentRemote()
    thread = CommentThread("post-1", remote)

    comment = await thread.add("  Nice post  ")
    assert remote.sent == ["Nice post"]
    assert thread.comments == [comment]
    assert comment["created_at"].startswith("2026-01-01")


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", None])
async def test_blank_comment_is_rejected_without_remote_call(text):
    remote = FakeCommentRemote()
    thread = CommentThread("post-1", remote)

    with pytest.raises(ValidationError):
        await thread.add(text)
    assert remote.sent == []
    assert thread.comments == []


@pytest.mark.asyncio
async def test_failed_comment_is_not_appended():
    thread = CommentThread("post-1", FakeCommentRemote(fail_with=RemoteFailure()), comments=[{"id": "old"}])
    with pytest.raises(RemoteFailure):
        await thread.add("hello")
    assert thread.comments == [{"id": "old"}]
