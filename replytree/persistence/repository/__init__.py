"""PostgreSQL repository implementations."""

from replytree.persistence.repository.comment import PostgresCommentRepository
from replytree.persistence.repository.post import PostgresPostRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
]
