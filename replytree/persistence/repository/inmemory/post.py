"""In-memory post repository for testing."""

from typing import Optional

from replytree.domain.model.post import Post
from replytree.domain.repository.post import PostRepository
from replytree.domain.value import PostId

from .store import InMemoryStore


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    ``lock`` is a per-post ``asyncio.Lock`` held in the shared store.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _posts(self) -> dict[PostId, Post]:
        return self._store.posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all_ids(self) -> list[PostId]:
        """Find the IDs of all posts, oldest first."""
        posts = sorted(self._posts.values(), key=lambda p: p.created_at)
        return [p.id for p in posts]

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    def lock(self, post_id: PostId):
        """Per-post asyncio lock."""
        return self._store.post_locks[post_id]

    async def get_comment_count(self, post_id: PostId) -> Optional[int]:
        """Read the stored comment counter."""
        post = self._posts.get(post_id)
        return post.comment_count if post else None

    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Add delta to the counter (floored at 0)."""
        post = self._posts.get(post_id)
        if post:
            # Domain models are immutable
            self._posts[post_id] = post.model_copy(
                update={"comment_count": max(post.comment_count + delta, 0)}
            )

    async def set_comment_count(self, post_id: PostId, value: int) -> None:
        """Overwrite the comment counter."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(update={"comment_count": value})
