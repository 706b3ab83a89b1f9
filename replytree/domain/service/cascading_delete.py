"""Cascading subtree deletion with counter maintenance."""

import asyncio

import logfire

from replytree.domain.error import NotAuthorizedError, NotFoundError
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.value import CommentId, Deadline, DeleteResult, PostId, UserId

from .base import Service


class CascadingDeleteCoordinator(Service):
    """Deletes a comment subtree and keeps ``Post.comment_count`` exact.

    Deleting and counting are one unit of work: the decrement is always the
    number of rows the storage layer reports as removed, never a separately
    read subtree size. The whole operation runs under the post's lock, which
    comment creation also takes, so no reply can attach to a node while its
    subtree is being removed.

    Removed rows are charged to the post each row is stored on. A corrupted
    reply whose ``post_id`` differs from its root's is still deleted (its
    parent is going away) but decrements its own post, not the root's.
    Each delete and its decrement run shielded, so cancelling the caller
    can't separate them.

    This is the only path that decrements a post's comment counter.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
    ) -> None:
        """Initialize cascading delete coordinator.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository (counter and lock owner)
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository

    async def delete_subtree(
        self,
        root_id: CommentId,
        actor_id: UserId,
        elevated: bool = False,
        deadline: Deadline | None = None,
    ) -> DeleteResult:
        """Delete a comment and all of its replies.

        Args:
            root_id: Subtree root comment ID
            actor_id: User requesting the deletion
            elevated: Whether the actor has moderator privileges
            deadline: Optional deadline, honoured up to the first deletion

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment doesn't exist (including a repeat delete)
            NotAuthorizedError: If the actor is neither author nor elevated
            DependencyError: If the storage layer fails
            DeadlineExceededError: If the deadline passes before deletion starts
        """
        with logfire.span(
            "cascading_delete.delete_subtree",
            root_id=str(root_id),
            actor_id=str(actor_id),
            elevated=elevated,
        ):
            root = await self.comment_repository.find_by_id(root_id)
            if root is None:
                logfire.warn("Comment not found for deletion", root_id=str(root_id))
                raise NotFoundError("Comment", str(root_id))

            if root.author_id != actor_id and not elevated:
                logfire.warn(
                    "Unauthorized comment deletion attempt",
                    root_id=str(root_id),
                    actor_id=str(actor_id),
                )
                raise NotAuthorizedError("comment", str(root_id), str(actor_id))

            async with self.post_repository.lock(root.post_id):
                # A concurrent delete may have won the lock first
                if await self.comment_repository.find_by_id(root_id) is None:
                    logfire.warn(
                        "Comment deleted concurrently", root_id=str(root_id)
                    )
                    raise NotFoundError("Comment", str(root_id))

                if deadline is not None:
                    deadline.check("comment subtree deletion")

                if self.comment_repository.supports_cascade:
                    deleted = await asyncio.shield(self._delete_cascade(root_id))
                else:
                    deleted = await self._delete_level_by_level(root_id)

            logfire.info(
                "Comment subtree deleted",
                root_id=str(root_id),
                post_id=str(root.post_id),
                deleted_count=deleted,
            )
            return DeleteResult(deleted_count=deleted)

    async def _delete_cascade(self, root_id: CommentId) -> int:
        removed = await self.comment_repository.cascading_delete_by_root(root_id)
        return await self._charge(removed)

    async def _delete_level(self, frontier: set[CommentId]) -> int:
        removed = await self.comment_repository.delete_by_ids(frontier)
        return await self._charge(removed)

    async def _charge(self, removed: dict[PostId, int]) -> int:
        """Decrement each post by the rows removed from it."""
        for post_id, count in removed.items():
            await self.post_repository.increment_comment_count(post_id, -count)
        if len(removed) > 1:
            logfire.warn(
                "Deleted subtree spanned several posts",
                post_ids=[str(post_id) for post_id in removed],
            )
        return sum(removed.values())

    async def _delete_level_by_level(self, root_id: CommentId) -> int:
        """Delete a subtree one level at a time for stores without a cascade.

        Each level is deleted, and the counters decremented by the rows it
        removed, before the next level is discovered. Once the root is gone
        the deadline is no longer checked, so no descendant is stranded.
        Cancellation can only land between levels.
        """
        visited: set[CommentId] = {root_id}
        frontier: set[CommentId] = {root_id}
        total = 0
        levels = 0

        while frontier:
            deleted = await asyncio.shield(self._delete_level(frontier))
            total += deleted
            levels += 1

            children = await self.comment_repository.find_children(frontier)
            frontier = {
                child_id
                for child_ids in children.values()
                for child_id in child_ids
                if child_id not in visited
            }
            visited |= frontier

        logfire.info(
            "Level-by-level deletion finished",
            root_id=str(root_id),
            levels=levels,
            deleted_count=total,
        )
        return total
