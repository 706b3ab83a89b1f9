"""Domain value objects for replytree.

Value objects are immutable and defined by their values, not identity.
"""

import time
from enum import Enum

from pydantic import Field

from replytree.domain.error import DeadlineExceededError
from replytree.domain.value.common import ValueObject


class ActorRole(str, Enum):
    """Role of the actor performing an operation."""

    MEMBER = "member"
    MODERATOR = "moderator"


class TraversalLimits(ValueObject):
    """Ceilings for a subtree traversal.

    ``max_nodes`` counts the root itself. ``max_depth`` is the number of reply
    levels below the root that may be visited; None means unbounded depth.
    """

    max_nodes: int | None = Field(default=None, ge=1)
    max_depth: int | None = Field(default=None, ge=0)


class SubtreeSize(ValueObject):
    """Result of a subtree size computation.

    ``size`` counts every visited comment including the root(s), so it is at
    least 1 for a single subtree and 0 only for an empty forest.

    When ``bounded_reached`` is set the traversal stopped at a ceiling and
    ``size`` may be an undercount.
    """

    size: int = Field(ge=0)
    bounded_reached: bool = False
    levels: int = Field(default=0, ge=0)

    @property
    def reply_count(self) -> int:
        """Number of descendants, excluding the root."""
        return self.size - 1


class DeleteResult(ValueObject):
    """Outcome of a subtree deletion."""

    deleted_count: int = Field(ge=0)


class ReconcileResult(ValueObject):
    """Outcome of a comment counter reconciliation."""

    before: int
    after: int
    corrected: bool
    approximate: bool = False


class Deadline(ValueObject):
    """Absolute deadline on the monotonic clock."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        """Create a deadline ``seconds`` from now."""
        return cls(expires_at=time.monotonic() + seconds)

    @property
    def remaining(self) -> float:
        return self.expires_at - time.monotonic()

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    def check(self, operation: str) -> None:
        """Raise DeadlineExceededError if the deadline has passed.

        Args:
            operation: Name of the operation, used in the error message

        Raises:
            DeadlineExceededError: If expired
        """
        if self.expired:
            raise DeadlineExceededError(operation)
