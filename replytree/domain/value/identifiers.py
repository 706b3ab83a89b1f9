"""Typed identifiers.

All IDs are UUIDs; NewType keeps a CommentId from being passed where a PostId
is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
