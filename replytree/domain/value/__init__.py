"""Domain value objects for replytree."""

from replytree.domain.value.identifiers import CommentId, PostId, UserId
from replytree.domain.value.types import (
    ActorRole,
    Deadline,
    DeleteResult,
    ReconcileResult,
    SubtreeSize,
    TraversalLimits,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "ActorRole",
    "Deadline",
    "DeleteResult",
    "ReconcileResult",
    "SubtreeSize",
    "TraversalLimits",
]
