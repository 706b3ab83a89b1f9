"""Unit tests for ReconcileCommentCountUseCase."""

from uuid import uuid4

import pytest

from replytree.application.usecase.comment import (
    ReconcileCommentCountRequest,
    ReconcileCommentCountUseCase,
)
from replytree.domain.error import NotAuthorizedError
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.value import ActorRole
from tests.conftest import make_post, seed_chain
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestReconcileCommentCountUseCase:
    """Tests for ReconcileCommentCountUseCase."""

    @pytest.mark.asyncio
    async def test_moderator_repairs_counter(self, unit_env):
        """A moderator gets the drift corrected."""
        # Arrange
        reconcile = await unit_env.get(ReconcileCommentCountUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        await seed_chain(post_repo, comment_repo, post, 3)
        await post_repo.set_comment_count(post.id, 7)

        # Act
        response = await reconcile.execute(
            ReconcileCommentCountRequest(
                post_id=str(post.id),
                user_id=str(uuid4()),
                role=ActorRole.MODERATOR,
            )
        )

        # Assert
        assert response.before == 7
        assert response.after == 3
        assert response.corrected is True

    @pytest.mark.asyncio
    async def test_member_is_refused(self, unit_env):
        """Members can't trigger reconciliation."""
        reconcile = await unit_env.get(ReconcileCommentCountUseCase)

        with pytest.raises(NotAuthorizedError):
            await reconcile.execute(
                ReconcileCommentCountRequest(post_id=str(uuid4()), user_id=str(uuid4()))
            )
