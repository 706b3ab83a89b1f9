"""Domain services."""

from .base import Service
from .cascading_delete import CascadingDeleteCoordinator
from .comment_service import CommentService
from .counter_reconciler import CounterReconciler
from .post_service import PostService
from .subtree_counter import SubtreeSizeCounter

__all__ = [
    "CascadingDeleteCoordinator",
    "CommentService",
    "CounterReconciler",
    "PostService",
    "Service",
    "SubtreeSizeCounter",
]
