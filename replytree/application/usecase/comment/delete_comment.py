"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from replytree.application.usecase.base import BaseUseCase
from replytree.config import TraversalSettings
from replytree.domain.error import NotFoundError
from replytree.domain.service import CascadingDeleteCoordinator, CommentService
from replytree.domain.value import ActorRole, CommentId, Deadline, PostId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    post_id: str  # UUID string (for validation)
    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author unless moderator)
    role: ActorRole = ActorRole.MEMBER


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    post_id: str
    comment_id: str
    deleted_count: int


class DeleteCommentUseCase(BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]):
    """Use case for deleting a comment together with all of its replies."""

    def __init__(
        self,
        comment_service: CommentService,
        cascading_delete: CascadingDeleteCoordinator,
        traversal_settings: TraversalSettings,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            cascading_delete: Subtree deletion coordinator
            traversal_settings: Traversal settings (deletion deadline)
        """
        self.comment_service = comment_service
        self.cascading_delete = cascading_delete
        self.traversal_settings = traversal_settings

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Args:
            request: Delete comment request

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment doesn't exist on the given post
            NotAuthorizedError: If the user is neither author nor moderator
            DependencyError: If the storage layer fails
            DeadlineExceededError: If deletion couldn't start before the deadline
        """
        comment_id = CommentId(UUID(request.comment_id))
        post_id = PostId(UUID(request.post_id))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None or comment.post_id != post_id:
            raise NotFoundError("Comment", request.comment_id)

        result = await self.cascading_delete.delete_subtree(
            root_id=comment_id,
            actor_id=UserId(UUID(request.user_id)),
            elevated=request.role == ActorRole.MODERATOR,
            deadline=Deadline.after(self.traversal_settings.delete_deadline_seconds),
        )

        return DeleteCommentResponse(
            post_id=request.post_id,
            comment_id=request.comment_id,
            deleted_count=result.deleted_count,
        )
