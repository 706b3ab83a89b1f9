"""Post repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Optional

from replytree.domain.model.post import Post
from replytree.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Owns the denormalized ``comment_count`` and the per-post serialization
    primitive used by every operation that mutates a post's comment tree.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_ids(self) -> List[PostId]:
        """Find the IDs of all posts.

        Returns:
            List of post IDs
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    def lock(self, post_id: PostId) -> AbstractAsyncContextManager[None]:
        """Serialize mutations of a post's comment tree.

        Entering the returned context blocks until no other holder exists for
        the same post. Locks for different posts never contend.

        Args:
            post_id: The post ID

        Returns:
            Async context manager holding the lock
        """
        pass

    @abstractmethod
    async def get_comment_count(self, post_id: PostId) -> Optional[int]:
        """Read the stored comment counter.

        Args:
            post_id: The post ID

        Returns:
            The stored counter, None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` (may be negative) to the comment counter.

        The counter never goes below zero.

        Args:
            post_id: The post ID
            delta: Amount to add
        """
        pass

    @abstractmethod
    async def set_comment_count(self, post_id: PostId, value: int) -> None:
        """Overwrite the comment counter.

        Args:
            post_id: The post ID
            value: New counter value
        """
        pass
