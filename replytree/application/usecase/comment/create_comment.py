"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.domain.error import NotFoundError
from replytree.domain.service import CommentService, PostService
from replytree.domain.value import CommentId, PostId, UserId

from .get_comments import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    author_id: str  # Actor from X-User-Id
    parent_id: str | None = None  # None for a root comment


class CreateCommentResponse(CommentItem):
    """The stored comment."""


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CreateCommentResponse]):
    """Adds a comment and counts it on the post in one locked step.

    Insert and increment share the post lock with subtree deletion. A reply
    racing the deletion of its ancestor is therefore either swept into that
    deletion (it got the lock first) or rejected with NotFoundError because
    its parent is gone.
    """

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Create the comment.

        Raises:
            NotFoundError: If the post or the parent comment doesn't exist
            ValueError: On malformed IDs or a parent from another post
        """
        post_id = PostId(UUID(request.post_id))
        author_id = UserId(UUID(request.author_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        if await self.post_service.get_post_by_id(post_id) is None:
            raise NotFoundError("Post", request.post_id)

        async with self.post_service.comment_lock(post_id):
            comment = await self.comment_service.create_comment(
                post_id=post_id,
                author_id=author_id,
                content=request.content,
                parent_id=parent_id,
            )
            await self.post_service.increment_comment_count(post_id)

        return CreateCommentResponse.from_comment(comment)
