"""Post aggregate root."""

from datetime import datetime

from pydantic import Field

from replytree.domain.model.common import DomainModel
from replytree.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    ``comment_count`` is a denormalized cache of the number of live comments
    whose ancestor chain terminates at this post. It is maintained by comment
    creation and subtree deletion, and repaired by reconciliation.
    """

    id: PostId
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
