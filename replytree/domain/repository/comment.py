"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from replytree.domain.model.comment import Comment
from replytree.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations, including the
    batched lookups that subtree traversals are written against.
    Implementations live in the infrastructure layer.
    """

    # Whether cascading_delete_by_root is backed by a native, atomic cascade
    supports_cascade: bool = False

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first.

        Args:
            post_id: The post ID

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def find_by_parent(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> List[Comment]:
        """Find one thread level of a post, oldest first.

        Args:
            post_id: The post ID
            parent_id: Parent comment ID, or None for the root comments

        Returns:
            List of comments directly under ``parent_id``
        """
        pass

    @abstractmethod
    async def find_root_ids(self, post_id: PostId) -> List[CommentId]:
        """Find the IDs of the root comments of a post (no parent).

        Args:
            post_id: The post ID

        Returns:
            List of root comment IDs
        """
        pass

    @abstractmethod
    async def find_children(
        self, parent_ids: set[CommentId], post_id: Optional[PostId] = None
    ) -> dict[CommentId, list[CommentId]]:
        """Find the direct children of every comment in ``parent_ids``.

        Issued once per traversal level, never once per node.

        Args:
            parent_ids: Parent comment IDs (one traversal frontier)
            post_id: When given, only children stored on this post

        Returns:
            Mapping of parent ID to child IDs; parents without children
            may be absent from the mapping
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_by_ids(self, comment_ids: set[CommentId]) -> dict[PostId, int]:
        """Hard delete a set of comments.

        Args:
            comment_ids: Comment IDs to delete

        Returns:
            Rows actually removed, grouped by the post each row belonged to
        """
        pass

    async def cascading_delete_by_root(
        self, root_id: CommentId
    ) -> dict[PostId, int]:
        """Delete a comment and its entire subtree in one atomic operation.

        Only available when ``supports_cascade`` is True. Descendants are
        followed through ``parent_id`` regardless of the post they are
        stored on, so no reply is left pointing at a deleted parent.

        Args:
            root_id: Subtree root comment ID

        Returns:
            Rows actually removed, grouped by the post each row belonged to
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not support cascading deletes"
        )
