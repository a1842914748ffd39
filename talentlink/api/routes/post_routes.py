"""
Post Routes

POST /posts - Create post
GET /posts - Feed (active posts, newest first)
GET /posts/stats - Engagement statistics for the current user
GET /posts/user/{uid} - Posts of one author
PUT /posts/{post_id} - Edit own post
DELETE /posts/{post_id} - Deactivate own post
POST /posts/{post_id}/like - Like
DELETE /posts/{post_id}/like - Unlike
POST /posts/{post_id}/like/toggle - Like or unlike
POST /posts/{post_id}/comments - Add comment
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from talentlink.core.auth import get_current_user
from talentlink.services.post_service import PostService, get_post_service
from talentlink.schemas.schemas import (
    PostCreate, PostUpdate, PostResponse, PostListResponse, PostStatsResponse,
    CommentCreate, CommentResponse, LikeResponse, UserRole, MessageResponse
)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post: PostCreate,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service)
):
    return posts.create(post.content, user)


@router.get("", response_model=PostListResponse)
async def list_posts(
    role: Optional[UserRole] = Query(None),
    author_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    posts: PostService = Depends(get_post_service)
):
    results = posts.list({"role": role.value if role else None, "author_id": author_id, "limit": limit})
    return PostListResponse(posts=results, total=len(results))


@router.get("/stats", response_model=PostStatsResponse)
async def post_stats(user: dict = Depends(get_current_user), posts: PostService = Depends(get_post_service)):
    return posts.statistics(user["uid"])


@router.get("/user/{uid}", response_model=PostListResponse)
async def user_posts(uid: str, posts: PostService = Depends(get_post_service)):
    results = posts.list_by_author(uid)
    return PostListResponse(posts=results, total=len(results))


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    update: PostUpdate,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service)
):
    return posts.update(post_id, update.content, user["uid"])


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service)
):
    posts.soft_delete(post_id, user["uid"])
    return MessageResponse(message="Post deleted successfully!")


@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(post_id: str, user: dict = Depends(get_current_user), posts: PostService = Depends(get_post_service)):
    liked, count = posts.add_like(post_id, user["uid"])
    return LikeResponse(post_id=post_id, liked=liked, like_count=count)


@router.delete("/{post_id}/like", response_model=LikeResponse)
async def unlike_post(post_id: str, user: dict = Depends(get_current_user), posts: PostService = Depends(get_post_service)):
    liked, count = posts.remove_like(post_id, user["uid"])
    return LikeResponse(post_id=post_id, liked=liked, like_count=count)


@router.post("/{post_id}/like/toggle", response_model=LikeResponse)
async def toggle_like(post_id: str, user: dict = Depends(get_current_user), posts: PostService = Depends(get_post_service)):
    liked, count = posts.toggle_like(post_id, user["uid"])
    return LikeResponse(post_id=post_id, liked=liked, like_count=count)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment: CommentCreate,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service)
):
    """Add a comment. The stored comment (server id and timestamp) is returned."""
    return posts.add_comment(post_id, comment.text, user)
