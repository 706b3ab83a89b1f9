"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from replytree.domain.error import NotFoundError
from replytree.domain.model.comment import Comment
from replytree.domain.repository import CommentRepository
from replytree.domain.value import CommentId, PostId, UserId

from .base import Service


class CommentService(Service):
    """Creates, edits and reads comments.

    Deletion lives in CascadingDeleteCoordinator.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Add a root comment to a post, or a reply under ``parent_id``.

        The caller holds the post's comment lock, so the parent can't be
        removed between the existence check and the insert.

        Raises:
            NotFoundError: If the parent doesn't exist (or was just deleted)
            ValueError: If the parent is on a different post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id is not None:
                await self._require_parent(parent_id, post_id)

            comment = await self.comment_repository.save(
                Comment(
                    id=CommentId(uuid4()),
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent_id,
                    created_at=datetime.now(),
                )
            )
            logfire.info(
                "Comment created",
                comment_id=str(comment.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return comment

    async def _require_parent(self, parent_id: CommentId, post_id: PostId) -> None:
        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None:
            logfire.warn("Reply to missing comment rejected", parent_id=str(parent_id))
            raise NotFoundError("Comment", str(parent_id))
        if parent.post_id != post_id:
            logfire.warn(
                "Reply across posts rejected",
                parent_id=str(parent_id),
                parent_post_id=str(parent.post_id),
                post_id=str(post_id),
            )
            raise ValueError("Parent comment does not belong to this post")

    async def update_comment(self, comment: Comment, content: str) -> Comment:
        """Replace a comment's content. Authorization is the caller's job."""
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment.id),
            content_length=len(content),
        ):
            updated = await self.comment_repository.save(
                comment.model_copy(update={"content": content})
            )
            logfire.info(
                "Comment content updated",
                comment_id=str(updated.id),
                post_id=str(updated.post_id),
            )
            return updated

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """All comments of a post, flat and oldest first."""
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            return await self.comment_repository.find_by_post(post_id)

    async def get_thread_level(
        self, post_id: PostId, parent_id: CommentId | None = None
    ) -> list[Comment]:
        """One level of a post's thread, oldest first.

        With no ``parent_id`` this is the post's root comments; otherwise the
        direct replies to that comment.

        Raises:
            NotFoundError: If ``parent_id`` isn't a comment on this post
        """
        with logfire.span(
            "comment_service.get_thread_level",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None or parent.post_id != post_id:
                    raise NotFoundError("Comment", str(parent_id))
            return await self.comment_repository.find_by_parent(post_id, parent_id)

    async def count_direct_replies(
        self, post_id: PostId, comment_ids: list[CommentId]
    ) -> dict[CommentId, int]:
        """Direct reply count of each comment, fetched in one batched lookup."""
        children = await self.comment_repository.find_children(
            set(comment_ids), post_id=post_id
        )
        return {
            comment_id: len(children.get(comment_id, [])) for comment_id in comment_ids
        }

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Look up one comment; None if it doesn't exist."""
        return await self.comment_repository.find_by_id(comment_id)
