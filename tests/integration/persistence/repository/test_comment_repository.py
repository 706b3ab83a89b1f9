"""Integration tests for PostgresCommentRepository and PostgresPostRepository.

Require a migrated PostgreSQL reachable at DATABASE__URL.
"""

import os
from uuid import uuid4

import pytest

from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.service import CascadingDeleteCoordinator, CounterReconciler
from replytree.domain.value import CommentId, UserId
from tests.conftest import make_comment, make_post, seed_chain, seed_complete_tree
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresCascade:
    """Subtree deletion through the recursive CTE."""

    @pytest.mark.asyncio
    async def test_cascading_delete_returns_row_count(self, integration_env):
        """The CTE removes the whole subtree and reports every row."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post = make_post()
        await post_repo.save(post)
        root = await seed_complete_tree(post_repo, comment_repo, post, 2, 3)

        # Act
        deleted = await comment_repo.cascading_delete_by_root(root.id)

        # Assert
        assert comment_repo.supports_cascade is True
        assert deleted == {post.id: 15}
        assert await comment_repo.find_by_post(post.id) == []

    @pytest.mark.asyncio
    async def test_cascading_delete_missing_root(self, integration_env):
        """Deleting an unknown root removes nothing."""
        comment_repo = await integration_env.get(CommentRepository)

        assert await comment_repo.cascading_delete_by_root(CommentId(uuid4())) == {}

    @pytest.mark.asyncio
    async def test_coordinator_keeps_counter_exact(self, integration_env):
        """Delete then reconcile finds no drift."""
        # Arrange
        coordinator = await integration_env.get(CascadingDeleteCoordinator)
        reconciler = await integration_env.get(CounterReconciler)
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        author_id = UserId(uuid4())
        post = make_post()
        await post_repo.save(post)
        chain = await seed_chain(post_repo, comment_repo, post, 3, author_id)
        await comment_repo.save(make_comment(post.id, offset=10))
        await post_repo.increment_comment_count(post.id, 1)

        # Act
        result = await coordinator.delete_subtree(chain[0].id, actor_id=author_id)
        reconciled = await reconciler.reconcile(post.id)

        # Assert
        assert result.deleted_count == 3
        assert await post_repo.get_comment_count(post.id) == 1
        assert reconciled.corrected is False

    @pytest.mark.asyncio
    async def test_find_children_batches_one_level(self, integration_env):
        """Children of several parents come back grouped by parent."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post = make_post()
        await post_repo.save(post)
        first = await seed_chain(post_repo, comment_repo, post, 2)
        second = await seed_chain(post_repo, comment_repo, post, 2)

        # Act
        children = await comment_repo.find_children({first[0].id, second[0].id})

        # Assert
        assert children == {
            first[0].id: [first[1].id],
            second[0].id: [second[1].id],
        }

    @pytest.mark.asyncio
    async def test_find_by_parent_lists_one_level(self, integration_env):
        """Roots and direct replies come back level by level."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post = make_post()
        await post_repo.save(post)
        chain = await seed_chain(post_repo, comment_repo, post, 3)

        # Act
        roots = await comment_repo.find_by_parent(post.id, None)
        replies = await comment_repo.find_by_parent(post.id, chain[0].id)

        # Assert
        assert [c.id for c in roots] == [chain[0].id]
        assert [c.id for c in replies] == [chain[1].id]

    @pytest.mark.asyncio
    async def test_cascade_reports_rows_per_post(self, integration_env):
        """A reply stored on another post is reported under that post."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post, other = make_post(), make_post()
        await post_repo.save(post)
        await post_repo.save(other)
        chain = await seed_chain(post_repo, comment_repo, post, 2)
        await comment_repo.save(make_comment(other.id, chain[1].id))

        # Act
        scoped = await comment_repo.find_children({chain[1].id}, post_id=post.id)
        deleted = await comment_repo.cascading_delete_by_root(chain[0].id)

        # Assert
        assert scoped == {}
        assert deleted == {post.id: 2, other.id: 1}
