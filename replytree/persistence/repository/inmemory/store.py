"""Shared state for the in-memory repositories."""

import asyncio
from collections import defaultdict

from replytree.domain.model import Comment, Post
from replytree.domain.value import CommentId, PostId


class InMemoryStore:
    """Tables and per-post locks shared by in-memory repositories.

    One store stands in for one database: repositories built over the same
    store see each other's writes and contend for the same locks.
    """

    def __init__(self) -> None:
        self.comments: dict[CommentId, Comment] = {}
        self.posts: dict[PostId, Post] = {}
        self.post_locks: defaultdict[PostId, asyncio.Lock] = defaultdict(asyncio.Lock)
