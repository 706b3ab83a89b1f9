"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostUseCase, PostResponse
from .get_post import GetPostRequest, GetPostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "PostResponse",
]
