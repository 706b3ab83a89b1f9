"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from replytree.domain.error import NotFoundError
from replytree.domain.repository import CommentRepository
from replytree.domain.service import CommentService
from replytree.domain.value import CommentId, UserId
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_root_comment(self, unit_env):
        """A comment without parent is a root comment of the post."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        author_id = UserId(uuid4())

        # Act
        result = await comment_service.create_comment(
            post_id=post.id,
            author_id=author_id,
            content="Root comment",
        )

        # Assert
        assert result.is_root
        assert result.post_id == post.id
        assert result.author_id == author_id

        saved = await comment_repo.find_by_id(result.id)
        assert saved == result

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """A reply references its parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        parent = make_comment(post.id)
        await comment_repo.save(parent)

        # Act
        result = await comment_service.create_comment(
            post_id=post.id,
            author_id=UserId(uuid4()),
            content="Reply",
            parent_id=parent.id,
        )

        # Assert
        assert result.parent_id == parent.id
        assert not result.is_root

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        """Replying to a nonexistent comment raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                content="Reply",
                parent_id=CommentId(uuid4()),
            )
        assert await comment_repo.find_by_post(post.id) == []

    @pytest.mark.asyncio
    async def test_parent_on_other_post_raises(self, unit_env):
        """A reply must stay on its parent's post."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = make_comment(make_post().id)
        await comment_repo.save(parent)

        with pytest.raises(ValueError, match="does not belong"):
            await comment_service.create_comment(
                post_id=make_post().id,
                author_id=UserId(uuid4()),
                content="Reply",
                parent_id=parent.id,
            )


class TestGetComments:
    """Tests for comment retrieval."""

    @pytest.mark.asyncio
    async def test_comments_for_post_oldest_first(self, unit_env):
        """Comments come back in creation order, other posts excluded."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        newer = make_comment(post.id, offset=10)
        older = make_comment(post.id, offset=0)
        await comment_repo.save(newer)
        await comment_repo.save(older)
        await comment_repo.save(make_comment(make_post().id))

        # Act
        comments = await comment_service.get_comments_for_post(post.id)

        # Assert
        assert [c.id for c in comments] == [older.id, newer.id]

    @pytest.mark.asyncio
    async def test_get_missing_comment_returns_none(self, unit_env):
        """Unknown IDs return None rather than raising."""
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.get_comment_by_id(CommentId(uuid4())) is None
