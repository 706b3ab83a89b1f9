"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from replytree.application.usecase.base import BaseUseCase
from replytree.domain.error import NotAuthorizedError, NotFoundError
from replytree.domain.service import CommentService, PostService
from replytree.domain.value import CommentId, PostId, UserId

from .get_comments import CommentItem


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    post_id: str  # UUID string (for validation)
    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    content: str = Field(min_length=1, max_length=10000)


class UpdateCommentResponse(CommentItem):
    """The edited comment."""


class UpdateCommentUseCase(BaseUseCase[UpdateCommentRequest, UpdateCommentResponse]):
    """Use case for editing a comment's content.

    The existence check and the save run under the post lock, so an edit
    can't write back a comment that a concurrent delete just removed.
    """

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service (comment lock)
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with the new content

        Returns:
            Updated comment details

        Raises:
            NotFoundError: If the comment doesn't exist on the given post
            NotAuthorizedError: If the user isn't the comment's author
        """
        comment_id = CommentId(UUID(request.comment_id))
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id))

        async with self.post_service.comment_lock(post_id):
            comment = await self.comment_service.get_comment_by_id(comment_id)
            if comment is None or comment.post_id != post_id:
                raise NotFoundError("Comment", request.comment_id)

            # Moderators may delete but never rewrite someone else's words
            if comment.author_id != user_id:
                raise NotAuthorizedError(
                    "comment", request.comment_id, request.user_id
                )

            updated = await self.comment_service.update_comment(
                comment, request.content
            )
        return UpdateCommentResponse.from_comment(updated)
