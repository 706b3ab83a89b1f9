"""Subtree size counting over externally stored reply trees."""

from typing import Iterable

import logfire

from replytree.domain.repository import CommentRepository
from replytree.domain.value import (
    CommentId,
    Deadline,
    PostId,
    SubtreeSize,
    TraversalLimits,
)

from .base import Service


class SubtreeSizeCounter(Service):
    """Counts the comments in a reply subtree.

    Breadth-first and level-batched: one ``find_children`` round trip per tree
    level, so depth drives the number of queries, not breadth or total size.
    A visited set makes the walk terminate on cyclic or duplicated parent
    references. No comment data is kept between calls.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        default_limits: TraversalLimits | None = None,
    ) -> None:
        """Initialize subtree size counter.

        Args:
            comment_repository: Comment repository
            default_limits: Ceilings applied when a call passes none
        """
        self.comment_repository = comment_repository
        self.default_limits = default_limits or TraversalLimits()

    async def compute_subtree_size(
        self,
        root_id: CommentId,
        limits: TraversalLimits | None = None,
        deadline: Deadline | None = None,
    ) -> SubtreeSize:
        """Count the comments in the subtree rooted at ``root_id``.

        The root itself counts, so the result is at least 1.

        Args:
            root_id: Subtree root comment ID
            limits: Node/depth ceilings (defaults to the counter's limits)
            deadline: Optional deadline checked before every level fetch

        Returns:
            Subtree size, flagged ``bounded_reached`` if a ceiling cut it short

        Raises:
            DependencyError: If the repository fails
            DeadlineExceededError: If the deadline passes mid-traversal
        """
        with logfire.span(
            "subtree_counter.compute_subtree_size", root_id=str(root_id)
        ):
            result = await self._traverse(
                [root_id], limits or self.default_limits, deadline, None
            )
            logfire.info(
                "Subtree size computed",
                root_id=str(root_id),
                size=result.size,
                levels=result.levels,
                bounded_reached=result.bounded_reached,
            )
            return result

    async def compute_forest_size(
        self,
        root_ids: Iterable[CommentId],
        limits: TraversalLimits | None = None,
        deadline: Deadline | None = None,
        post_id: PostId | None = None,
    ) -> SubtreeSize:
        """Count the comments in several subtrees with one shared traversal.

        Equivalent to summing ``compute_subtree_size`` over disjoint roots,
        but every level of every subtree is fetched in the same round trip.
        The roots count toward ``max_nodes`` like any other node.

        Args:
            root_ids: Root comment IDs
            limits: Node/depth ceilings, applied to the forest as a whole
            deadline: Optional deadline checked before every level fetch
            post_id: When given, descendants stored on other posts are skipped

        Returns:
            Total size of all subtrees (0 for no roots)
        """
        root_ids = list(root_ids)
        with logfire.span(
            "subtree_counter.compute_forest_size", root_count=len(root_ids)
        ):
            return await self._traverse(
                root_ids, limits or self.default_limits, deadline, post_id
            )

    async def _traverse(
        self,
        root_ids: list[CommentId],
        limits: TraversalLimits,
        deadline: Deadline | None,
        post_id: PostId | None,
    ) -> SubtreeSize:
        roots = list(dict.fromkeys(root_ids))
        bounded = False
        if limits.max_nodes is not None and len(roots) > limits.max_nodes:
            roots = roots[: limits.max_nodes]
            bounded = True

        visited: set[CommentId] = set(roots)
        frontier: set[CommentId] = set() if bounded else set(roots)
        depth = 0

        while frontier:
            if deadline is not None:
                deadline.check("subtree traversal")

            children = await self.comment_repository.find_children(
                frontier, post_id=post_id
            )
            new_ids = [
                child_id
                for child_ids in children.values()
                for child_id in child_ids
                if child_id not in visited
            ]
            if not new_ids:
                break

            if limits.max_depth is not None and depth >= limits.max_depth:
                bounded = True
                break

            next_frontier: set[CommentId] = set()
            for child_id in new_ids:
                # Same child listed twice in one level (corrupted data)
                if child_id in visited:
                    continue
                if limits.max_nodes is not None and len(visited) >= limits.max_nodes:
                    bounded = True
                    break
                visited.add(child_id)
                next_frontier.add(child_id)

            depth += 1
            if bounded:
                break
            frontier = next_frontier

        if bounded:
            logfire.warn(
                "Subtree traversal stopped at ceiling",
                visited=len(visited),
                levels=depth,
                max_nodes=limits.max_nodes,
                max_depth=limits.max_depth,
            )

        return SubtreeSize(size=len(visited), bounded_reached=bounded, levels=depth)
