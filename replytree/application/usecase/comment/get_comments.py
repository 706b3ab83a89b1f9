"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.domain.model.comment import Comment
from replytree.domain.service import CommentService
from replytree.domain.value import CommentId, PostId


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            created_at=comment.created_at,
        )


class CommentListItem(CommentItem):
    """Comment item with the number of replies directly under it."""

    direct_reply_count: int


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    parent_id: str | None = None  # List only the direct replies to this comment
    roots_only: bool = False  # List only the root comments


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    parent_id: str | None
    comments: list[CommentListItem]
    total: int


class GetCommentsUseCase(BaseUseCase[GetCommentsRequest, GetCommentsResponse]):
    """Use case for listing a post's comments, whole or one thread level."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Without a filter every comment of the post is returned flat, oldest
        first, and clients rebuild threads from ``parent_id``. With
        ``roots_only`` or ``parent_id`` a single thread level is returned.
        Either way each item carries its direct reply count, looked up for
        the whole page at once.

        Args:
            request: Get comments request with post ID and optional level

        Returns:
            List of comments

        Raises:
            NotFoundError: If ``parent_id`` isn't a comment on the post
            ValueError: On malformed IDs or both filters at once
        """
        post_id = PostId(UUID(request.post_id))

        if request.parent_id is not None and request.roots_only:
            raise ValueError("parent_id and roots_only are mutually exclusive")

        if request.parent_id is not None:
            comments = await self.comment_service.get_thread_level(
                post_id, CommentId(UUID(request.parent_id))
            )
        elif request.roots_only:
            comments = await self.comment_service.get_thread_level(post_id)
        else:
            comments = await self.comment_service.get_comments_for_post(post_id)

        reply_counts = await self.comment_service.count_direct_replies(
            post_id, [comment.id for comment in comments]
        )

        items = [
            CommentListItem(
                **CommentItem.from_comment(comment).model_dump(),
                direct_reply_count=reply_counts[comment.id],
            )
            for comment in comments
        ]
        return GetCommentsResponse(
            post_id=request.post_id,
            parent_id=request.parent_id,
            comments=items,
            total=len(items),
        )
