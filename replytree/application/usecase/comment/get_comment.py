"""Get single comment use case."""

from uuid import UUID

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.domain.error import NotFoundError
from replytree.domain.service import CommentService, SubtreeSizeCounter
from replytree.domain.value import CommentId, PostId

from .get_comments import CommentItem


class GetCommentRequest(BaseModel):
    """Get comment request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string


class CommentDetail(CommentItem):
    """Comment with its reply count."""

    reply_count: int  # All descendants, not only direct replies
    reply_count_approximate: bool  # Count stopped at a traversal ceiling


class GetCommentUseCase(BaseUseCase[GetCommentRequest, CommentDetail]):
    """Use case for getting one comment together with its reply count."""

    def __init__(
        self,
        comment_service: CommentService,
        subtree_counter: SubtreeSizeCounter,
    ) -> None:
        """Initialize get comment use case.

        Args:
            comment_service: Comment domain service
            subtree_counter: Subtree size counter
        """
        self.comment_service = comment_service
        self.subtree_counter = subtree_counter

    async def execute(self, request: GetCommentRequest) -> CommentDetail:
        """Execute get comment flow.

        Args:
            request: Get comment request

        Returns:
            Comment details with ``reply_count``

        Raises:
            NotFoundError: If the comment doesn't exist on the given post
        """
        comment_id = CommentId(UUID(request.comment_id))
        post_id = PostId(UUID(request.post_id))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None or comment.post_id != post_id:
            raise NotFoundError("Comment", request.comment_id)

        subtree = await self.subtree_counter.compute_subtree_size(comment_id)

        return CommentDetail(
            **CommentItem.from_comment(comment).model_dump(),
            reply_count=subtree.reply_count,
            reply_count_approximate=subtree.bounded_reached,
        )
