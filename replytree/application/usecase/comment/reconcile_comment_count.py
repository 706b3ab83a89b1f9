"""Reconcile comment count use case."""

from uuid import UUID

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.config import TraversalSettings
from replytree.domain.error import NotAuthorizedError
from replytree.domain.service import CounterReconciler
from replytree.domain.value import ActorRole, Deadline, PostId


class ReconcileCommentCountRequest(BaseModel):
    """Reconcile comment count request."""

    post_id: str  # UUID string
    user_id: str
    role: ActorRole = ActorRole.MEMBER


class ReconcileCommentCountResponse(BaseModel):
    """Reconcile comment count response."""

    post_id: str
    before: int
    after: int
    corrected: bool
    approximate: bool


class ReconcileCommentCountUseCase(
    BaseUseCase[ReconcileCommentCountRequest, ReconcileCommentCountResponse]
):
    """Use case for repairing a post's denormalized comment count.

    Restricted to moderators; intended for drift repair, not the hot path.
    """

    def __init__(
        self,
        counter_reconciler: CounterReconciler,
        traversal_settings: TraversalSettings,
    ) -> None:
        self.counter_reconciler = counter_reconciler
        self.traversal_settings = traversal_settings

    async def execute(
        self, request: ReconcileCommentCountRequest
    ) -> ReconcileCommentCountResponse:
        """Execute reconciliation for one post.

        Raises:
            NotAuthorizedError: If the user is not a moderator
            NotFoundError: If the post doesn't exist
        """
        if request.role != ActorRole.MODERATOR:
            raise NotAuthorizedError("post", request.post_id, request.user_id)

        result = await self.counter_reconciler.reconcile(
            PostId(UUID(request.post_id)),
            deadline=Deadline.after(self.traversal_settings.reconcile_deadline_seconds),
        )

        return ReconcileCommentCountResponse(
            post_id=request.post_id,
            before=result.before,
            after=result.after,
            corrected=result.corrected,
            approximate=result.approximate,
        )
