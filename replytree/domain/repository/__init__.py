"""Repository interfaces for replytree domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from replytree.domain.repository.comment import CommentRepository
from replytree.domain.repository.post import PostRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
]
