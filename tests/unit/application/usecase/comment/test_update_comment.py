"""Unit tests for UpdateCommentUseCase."""

from uuid import uuid4

import pytest

from replytree.application.usecase.comment import (
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from replytree.domain.error import NotAuthorizedError, NotFoundError
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.value import UserId
from tests.conftest import make_post, seed_chain
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_update_comment_content_success(self, unit_env):
        """Updating comment content by author should succeed."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        post = make_post()
        chain = await seed_chain(post_repo, comment_repo, post, 2, author_id)

        request = UpdateCommentRequest(
            post_id=str(post.id),
            comment_id=str(chain[1].id),
            user_id=str(author_id),
            content="Updated comment",
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.comment_id == str(chain[1].id)
        assert response.content == "Updated comment"
        assert response.parent_id == str(chain[0].id)

        # Verify it was saved and nothing else moved
        saved_comment = await comment_repo.find_by_id(chain[1].id)
        assert saved_comment.content == "Updated comment"
        assert saved_comment.parent_id == chain[0].id
        assert saved_comment.created_at == chain[1].created_at
        assert await post_repo.get_comment_count(post.id) == 2

    @pytest.mark.asyncio
    async def test_update_comment_not_authorized_when_not_author(self, unit_env):
        """Updating comment by non-author should raise NotAuthorizedError."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        chain = await seed_chain(post_repo, comment_repo, post, 1)

        request = UpdateCommentRequest(
            post_id=str(post.id),
            comment_id=str(chain[0].id),
            user_id=str(uuid4()),  # Different user
            content="Hijacked comment",
        )

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(request)
        saved_comment = await comment_repo.find_by_id(chain[0].id)
        assert saved_comment.content == chain[0].content

    @pytest.mark.asyncio
    async def test_update_comment_fails_when_comment_not_found(self, unit_env):
        """Updating non-existent comment should raise NotFoundError."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = make_post()
        await post_repo.save(post)

        request = UpdateCommentRequest(
            post_id=str(post.id),
            comment_id=str(uuid4()),  # Non-existent comment
            user_id=str(uuid4()),
            content="New content",
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_update_comment_fails_when_comment_belongs_to_different_post(
        self, unit_env
    ):
        """Updating comment through another post's URL should raise NotFoundError."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        post = make_post()
        other_post = make_post()
        await post_repo.save(other_post)
        chain = await seed_chain(post_repo, comment_repo, post, 1, author_id)

        request = UpdateCommentRequest(
            post_id=str(other_post.id),  # Wrong post!
            comment_id=str(chain[0].id),
            user_id=str(author_id),
            content="Updated comment",
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(request)

    def test_update_comment_rejects_empty_content(self):
        """Empty content fails request validation."""
        with pytest.raises(ValueError):
            UpdateCommentRequest(
                post_id=str(uuid4()),
                comment_id=str(uuid4()),
                user_id=str(uuid4()),
                content="",
            )
