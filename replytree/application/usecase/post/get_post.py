"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.domain.error import NotFoundError
from replytree.domain.service import PostService
from replytree.domain.value import PostId

from .create_post import PostResponse


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string


class GetPostUseCase(BaseUseCase[GetPostRequest, PostResponse]):
    """Use case for getting a single post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> PostResponse:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.post_service.get_post_by_id(PostId(UUID(request.post_id)))
        if post is None:
            raise NotFoundError("Post", request.post_id)
        return PostResponse.from_post(post)
