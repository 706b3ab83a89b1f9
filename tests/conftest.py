"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from replytree.domain.model import Comment, Post
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.value import CommentId, PostId, UserId


def make_post(author_id: UserId | None = None, comment_count: int = 0) -> Post:
    """Helper function to build a test post.

    Args:
        author_id: Post author (random if omitted)
        comment_count: Initial stored comment counter

    Returns:
        Unsaved Post
    """
    return Post(
        id=PostId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        title="Test Post",
        comment_count=comment_count,
        created_at=datetime.now(),
    )


def make_comment(
    post_id: PostId,
    parent_id: CommentId | None = None,
    author_id: UserId | None = None,
    comment_id: CommentId | None = None,
    offset: int = 0,
) -> Comment:
    """Helper function to build a test comment.

    ``offset`` shifts ``created_at`` by that many seconds so tests can rely
    on creation order.
    """
    return Comment(
        id=comment_id or CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        content="Test comment",
        parent_id=parent_id,
        created_at=datetime.now() + timedelta(seconds=offset),
    )


async def seed_chain(
    post_repository: PostRepository,
    comment_repository: CommentRepository,
    post: Post,
    length: int,
    author_id: UserId | None = None,
) -> list[Comment]:
    """Save a linear reply chain C1 -> C2 -> ... -> Cn under a root comment.

    The post is saved with a counter matching everything seeded on it.

    Returns:
        Chain comments, root first
    """
    chain: list[Comment] = []
    parent_id = None
    for i in range(length):
        comment = make_comment(post.id, parent_id, author_id, offset=i)
        await comment_repository.save(comment)
        chain.append(comment)
        parent_id = comment.id

    await _save_with_count(post_repository, comment_repository, post)
    return chain


async def seed_complete_tree(
    post_repository: PostRepository,
    comment_repository: CommentRepository,
    post: Post,
    branching: int,
    depth: int,
    author_id: UserId | None = None,
) -> Comment:
    """Save a complete tree with ``branching`` children per node.

    ``depth`` is the number of reply levels below the root, so the tree has
    ``(branching ** (depth + 1) - 1) / (branching - 1)`` comments.

    Returns:
        Root comment
    """
    root = make_comment(post.id, author_id=author_id)
    await comment_repository.save(root)

    level = [root]
    for _ in range(depth):
        next_level = []
        for parent in level:
            for _ in range(branching):
                child = make_comment(post.id, parent.id, author_id)
                await comment_repository.save(child)
                next_level.append(child)
        level = next_level

    await _save_with_count(post_repository, comment_repository, post)
    return root


async def _save_with_count(
    post_repository: PostRepository,
    comment_repository: CommentRepository,
    post: Post,
) -> None:
    comments = await comment_repository.find_by_post(post.id)
    await post_repository.save(post.model_copy(update={"comment_count": len(comments)}))
