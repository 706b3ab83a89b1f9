"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Response, status
from pydantic import BaseModel, Field

from replytree.application.usecase.comment import (
    CommentDetail,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetCommentUseCase,
    ReconcileCommentCountRequest,
    ReconcileCommentCountResponse,
    ReconcileCommentCountUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from replytree.domain.error import (
    DeadlineExceededError,
    DependencyError,
    NotAuthorizedError,
    NotFoundError,
)
from replytree.domain.value import ActorRole
from replytree.interface.api.routes.actor import require_user_id

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = Field(min_length=1, max_length=10000)


@router.post(
    "/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires an authenticated actor. A reply to a comment that no longer
    exists (including one deleted while the reply was in flight) is a 404.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        x_user_id: Authenticated user ID header

    Returns:
        Created comment details

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = require_user_id(x_user_id)

    try:
        use_case_request = CreateCommentRequest(
            post_id=post_id,
            content=request.content,
            author_id=user_id,
            parent_id=request.parent_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except NotFoundError as e:
        logfire.warn("Comment creation failed - not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DependencyError as e:
        logfire.error("Comment creation failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    parent_id: str | None = None,
    roots_only: bool = False,
) -> GetCommentsResponse:
    """Get a post's comments, oldest first.

    All of them by default, or one thread level: ``roots_only`` for the
    root comments, ``parent_id`` for the direct replies to one comment.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI
        parent_id: Optional parent comment UUID
        roots_only: List only root comments

    Returns:
        List of comments with their direct reply counts
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(
                post_id=post_id, parent_id=parent_id, roots_only=roots_only
            )
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DependencyError as e:
        logfire.error("Comment listing failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("/{post_id}/comments/{comment_id}", response_model=CommentDetail)
async def get_comment(
    post_id: str,
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> CommentDetail:
    """Get one comment with its total reply count.

    ``reply_count_approximate`` is set when the count stopped at a traversal
    ceiling and may be an undercount.
    """
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(post_id=post_id, comment_id=comment_id)
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DependencyError as e:
        logfire.error("Reply count failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.patch("/{post_id}/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    post_id: str,
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's content.

    Only the comment author can edit.

    Args:
        post_id: Post UUID
        comment_id: Comment UUID
        request: New content
        update_comment_use_case: Update comment use case from DI
        x_user_id: Authenticated user ID header

    Returns:
        Updated comment details

    Raises:
        HTTPException: 401 if not authenticated, 404 if absent, 403 if not
            the author
    """
    user_id = require_user_id(x_user_id)

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                post_id=post_id,
                comment_id=comment_id,
                user_id=user_id,
                content=request.content,
            )
        )
    except NotFoundError as e:
        logfire.warn("Comment update failed - not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment update attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this comment",
        )
    except DependencyError as e:
        logfire.error("Comment update failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete(
    "/{post_id}/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_user_id: str | None = Header(default=None),
    x_user_role: ActorRole = Header(default=ActorRole.MEMBER),
) -> Response:
    """Delete a comment and all of its replies.

    Only the comment author or a moderator can delete.

    Args:
        post_id: Post UUID
        comment_id: Comment UUID
        delete_comment_use_case: Delete comment use case from DI
        x_user_id: Authenticated user ID header
        x_user_role: Actor role header

    Raises:
        HTTPException: 404 if absent, 403 if not allowed, 502 on storage failure,
            504 if the deadline passed
    """
    user_id = require_user_id(x_user_id)

    try:
        result = await delete_comment_use_case.execute(
            DeleteCommentRequest(
                post_id=post_id,
                comment_id=comment_id,
                user_id=user_id,
                role=x_user_role,
            )
        )
    except NotFoundError as e:
        logfire.warn("Comment deletion failed - not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment deletion attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except DependencyError as e:
        logfire.error("Comment deletion failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except DeadlineExceededError as e:
        logfire.error("Comment deletion timed out", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Comment deletion timed out",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    logfire.info(
        "Comment deleted via API",
        post_id=post_id,
        comment_id=comment_id,
        deleted_count=result.deleted_count,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/comments/reconcile",
    response_model=ReconcileCommentCountResponse,
)
async def reconcile_comment_count(
    post_id: str,
    reconcile_use_case: FromDishka[ReconcileCommentCountUseCase],
    x_user_id: str | None = Header(default=None),
    x_user_role: ActorRole = Header(default=ActorRole.MEMBER),
) -> ReconcileCommentCountResponse:
    """Recount a post's comments and repair its comment count.

    Moderators only.
    """
    user_id = require_user_id(x_user_id)

    try:
        return await reconcile_use_case.execute(
            ReconcileCommentCountRequest(
                post_id=post_id, user_id=user_id, role=x_user_role
            )
        )
    except NotAuthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator role required",
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DependencyError as e:
        logfire.error("Reconciliation failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except DeadlineExceededError as e:
        logfire.error("Reconciliation timed out", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Reconciliation timed out",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
