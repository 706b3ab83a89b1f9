"""Create post use case."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.domain.model.post import Post
from replytree.domain.service import PostService
from replytree.domain.value import PostId, UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    author_id: str  # User ID from the authenticated actor


class PostResponse(BaseModel):
    """Post details."""

    post_id: str
    author_id: str
    title: str
    comment_count: int
    created_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            post_id=str(post.id),
            author_id=str(post.author_id),
            title=post.title,
            comment_count=post.comment_count,
            created_at=post.created_at,
        )


class CreatePostUseCase(BaseUseCase[CreatePostRequest, PostResponse]):
    """Use case for creating a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Create a post with an empty comment counter.

        Args:
            request: Create post request

        Returns:
            Created post
        """
        post = Post(
            id=PostId(uuid4()),
            author_id=UserId(UUID(request.author_id)),
            title=request.title,
            comment_count=0,
            created_at=datetime.now(),
        )
        saved = await self.post_service.save_post(post)
        return PostResponse.from_post(saved)
