"""Post routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field

from replytree.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    PostResponse,
)
from replytree.domain.error import DependencyError, NotFoundError
from replytree.interface.api.routes.actor import require_user_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    x_user_id: str | None = Header(default=None),
) -> PostResponse:
    """Create a post.

    Requires an authenticated actor.
    """
    user_id = require_user_id(x_user_id)
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(title=request.title, author_id=user_id)
        )
    except DependencyError as e:
        logfire.error("Post creation failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
) -> PostResponse:
    """Get a post, including its comment count."""
    try:
        return await get_post_use_case.execute(GetPostRequest(post_id=post_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DependencyError as e:
        logfire.error("Post lookup failed - storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Storage unavailable",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
