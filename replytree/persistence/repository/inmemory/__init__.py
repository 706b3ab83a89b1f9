"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .store import InMemoryStore

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryStore",
]
