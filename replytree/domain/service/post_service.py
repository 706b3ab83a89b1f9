"""Post domain service."""

from contextlib import AbstractAsyncContextManager

import logfire

from replytree.domain.model.post import Post
from replytree.domain.repository import PostRepository
from replytree.domain.value import PostId

from .base import Service


class PostService(Service):
    """Post storage plus the comment-counter operations used on create."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        with logfire.span("post_service.save_post", post_id=str(post.id)):
            return await self.post_repository.save(post)

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Look up a post; None if it doesn't exist."""
        return await self.post_repository.find_by_id(post_id)

    def comment_lock(self, post_id: PostId) -> AbstractAsyncContextManager[None]:
        """Lock serializing every change to a post's comment tree and counter.

        Shared with CascadingDeleteCoordinator and CounterReconciler.
        """
        return self.post_repository.lock(post_id)

    async def increment_comment_count(self, post_id: PostId) -> None:
        """Count one new comment. Call inside ``comment_lock``."""
        await self.post_repository.increment_comment_count(post_id, 1)
        logfire.info("Comment count incremented", post_id=str(post_id))
