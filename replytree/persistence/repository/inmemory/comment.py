"""In-memory comment repository for testing."""

from collections import Counter, defaultdict
from typing import Optional

from replytree.domain.model.comment import Comment
from replytree.domain.repository.comment import CommentRepository
from replytree.domain.value import CommentId, PostId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Without ``cascade`` it behaves like a store with no native cascading
    delete, which makes callers fall back to level-by-level deletion.
    """

    def __init__(
        self, store: InMemoryStore | None = None, cascade: bool = False
    ) -> None:
        self._store = store or InMemoryStore()
        self.supports_cascade = cascade

    @property
    def _comments(self) -> dict[CommentId, Comment]:
        return self._store.comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_by_parent(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> list[Comment]:
        """Find one thread level of a post, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id == parent_id
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_root_ids(self, post_id: PostId) -> list[CommentId]:
        """Find the IDs of the root comments of a post."""
        return [
            c.id
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        ]

    async def find_children(
        self, parent_ids: set[CommentId], post_id: Optional[PostId] = None
    ) -> dict[CommentId, list[CommentId]]:
        """Find direct children of a set of comments."""
        children: dict[CommentId, list[CommentId]] = defaultdict(list)
        for comment in self._comments.values():
            if post_id is not None and comment.post_id != post_id:
                continue
            if comment.parent_id is not None and comment.parent_id in parent_ids:
                children[comment.parent_id].append(comment.id)
        return dict(children)

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete_by_ids(self, comment_ids: set[CommentId]) -> dict[PostId, int]:
        """Delete a set of comments, counting the removed ones per post."""
        deleted: Counter[PostId] = Counter()
        for comment_id in comment_ids:
            comment = self._comments.pop(comment_id, None)
            if comment is not None:
                deleted[comment.post_id] += 1
        return dict(deleted)

    async def cascading_delete_by_root(
        self, root_id: CommentId
    ) -> dict[PostId, int]:
        """Delete a comment and its subtree without yielding to the event loop."""
        if not self.supports_cascade:
            return await super().cascading_delete_by_root(root_id)

        if root_id not in self._comments:
            return {}

        subtree = {root_id}
        frontier = {root_id}
        while frontier:
            frontier = {
                c.id
                for c in self._comments.values()
                if c.parent_id in frontier and c.id not in subtree
            }
            subtree |= frontier

        deleted: Counter[PostId] = Counter()
        for comment_id in subtree:
            deleted[self._comments.pop(comment_id).post_id] += 1
        return dict(deleted)
