"""Comment entity.

Comments form a reply forest per post: each comment optionally references
one parent comment, with unlimited depth and branching.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from replytree.domain.model.common import DomainModel
from replytree.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post (``parent_id`` is None) or a reply to
    another comment. Every comment in a subtree shares the root's ``post_id``.
    Stored data is not trusted to be acyclic.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
