"""Out-of-band repair of denormalized comment counters."""

import logfire

from replytree.domain.error import NotFoundError
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.value import Deadline, PostId, ReconcileResult, TraversalLimits

from .base import Service
from .subtree_counter import SubtreeSizeCounter


class CounterReconciler(Service):
    """Recomputes a post's true comment count and corrects drift.

    Idempotent; not used on the request hot path.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        subtree_counter: SubtreeSizeCounter,
        limits: TraversalLimits | None = None,
    ) -> None:
        """Initialize counter reconciler.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            subtree_counter: Subtree size counter
            limits: Ceilings for the recount; a capped recount is never written
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.subtree_counter = subtree_counter
        self.limits = limits or TraversalLimits()

    async def reconcile(
        self, post_id: PostId, deadline: Deadline | None = None
    ) -> ReconcileResult:
        """Recount a post's live comments and overwrite the counter if it drifted.

        The true count is the total size of the subtrees under the post's
        root comments. Orphans (comments whose parent no longer exists) are
        not reachable and don't count, and neither are descendants stored on
        another post, which deletion charges to their own post.

        Args:
            post_id: Post ID
            deadline: Optional deadline for the recount

        Returns:
            Counter value before and after, and whether it was corrected

        Raises:
            NotFoundError: If the post doesn't exist
            DependencyError: If the storage layer fails
            DeadlineExceededError: If the recount runs past the deadline
        """
        with logfire.span("counter_reconciler.reconcile", post_id=str(post_id)):
            async with self.post_repository.lock(post_id):
                before = await self.post_repository.get_comment_count(post_id)
                if before is None:
                    logfire.warn(
                        "Post not found for reconciliation", post_id=str(post_id)
                    )
                    raise NotFoundError("Post", str(post_id))

                root_ids = await self.comment_repository.find_root_ids(post_id)
                actual = await self.subtree_counter.compute_forest_size(
                    root_ids, limits=self.limits, deadline=deadline, post_id=post_id
                )

                if actual.bounded_reached:
                    logfire.warn(
                        "Recount capped, counter left unchanged",
                        post_id=str(post_id),
                        stored=before,
                        counted_at_least=actual.size,
                    )
                    return ReconcileResult(
                        before=before, after=before, corrected=False, approximate=True
                    )

                if actual.size == before:
                    logfire.info(
                        "Comment counter consistent",
                        post_id=str(post_id),
                        comment_count=before,
                    )
                    return ReconcileResult(before=before, after=before, corrected=False)

                logfire.warn(
                    "Comment counter drift detected",
                    post_id=str(post_id),
                    stored=before,
                    actual=actual.size,
                    drift=before - actual.size,
                )
                await self.post_repository.set_comment_count(post_id, actual.size)
                return ReconcileResult(before=before, after=actual.size, corrected=True)
