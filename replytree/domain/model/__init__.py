"""Domain model entities for replytree."""

from replytree.domain.model.comment import Comment
from replytree.domain.model.post import Post

__all__ = [
    "Post",
    "Comment",
]
