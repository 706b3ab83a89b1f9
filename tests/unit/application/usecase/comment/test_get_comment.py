"""Unit tests for GetCommentUseCase and GetCommentsUseCase."""

from uuid import uuid4

import pytest

from replytree.application.usecase.comment import (
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentUseCase,
)
from replytree.domain.error import NotFoundError
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.service import CommentService
from replytree.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryStore,
)
from tests.conftest import make_post, seed_chain, seed_complete_tree
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class CountingCommentRepository(InMemoryCommentRepository):
    """Records every find_children round trip."""

    def __init__(self, store: InMemoryStore) -> None:
        super().__init__(store)
        self.find_children_calls = 0

    async def find_children(self, parent_ids, post_id=None):
        self.find_children_calls += 1
        return await super().find_children(parent_ids, post_id)


class TestGetCommentUseCase:
    """Tests for GetCommentUseCase."""

    @pytest.mark.asyncio
    async def test_reply_count_includes_all_descendants(self, unit_env):
        """reply_count counts nested replies, not only direct ones."""
        # Arrange
        get_comment = await unit_env.get(GetCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        root = await seed_complete_tree(post_repo, comment_repo, post, 2, 2)

        # Act
        detail = await get_comment.execute(
            GetCommentRequest(post_id=str(post.id), comment_id=str(root.id))
        )

        # Assert
        assert detail.comment_id == str(root.id)
        assert detail.reply_count == 6
        assert detail.reply_count_approximate is False

    @pytest.mark.asyncio
    async def test_leaf_has_no_replies(self, unit_env):
        """The deepest comment of a chain has reply_count 0."""
        get_comment = await unit_env.get(GetCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        chain = await seed_chain(post_repo, comment_repo, post, 3)

        detail = await get_comment.execute(
            GetCommentRequest(post_id=str(post.id), comment_id=str(chain[-1].id))
        )

        assert detail.reply_count == 0
        assert detail.parent_id == str(chain[-2].id)

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        """Unknown comments raise NotFoundError."""
        get_comment = await unit_env.get(GetCommentUseCase)

        with pytest.raises(NotFoundError):
            await get_comment.execute(
                GetCommentRequest(post_id=str(uuid4()), comment_id=str(uuid4()))
            )


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_all_comments_flat(self, unit_env):
        """Every comment of the post is listed with its parent reference."""
        # Arrange
        get_comments = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        chain = await seed_chain(post_repo, comment_repo, post, 3)

        # Act
        response = await get_comments.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        assert response.total == 3
        assert [c.comment_id for c in response.comments] == [
            str(c.id) for c in chain
        ]
        assert response.comments[0].parent_id is None

    @pytest.mark.asyncio
    async def test_items_carry_direct_reply_counts(self, unit_env):
        """Each item counts only the replies directly under it."""
        # Arrange
        get_comments = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        await seed_chain(post_repo, comment_repo, post, 3)

        # Act
        response = await get_comments.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        assert [c.direct_reply_count for c in response.comments] == [1, 1, 0]

    @pytest.mark.asyncio
    async def test_roots_only_lists_top_level(self, unit_env):
        """roots_only returns the post's root comments."""
        # Arrange
        get_comments = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        chain = await seed_chain(post_repo, comment_repo, post, 2)
        root = await seed_complete_tree(post_repo, comment_repo, post, 3, 1)

        # Act
        response = await get_comments.execute(
            GetCommentsRequest(post_id=str(post.id), roots_only=True)
        )

        # Assert
        assert response.total == 2
        counts = {c.comment_id: c.direct_reply_count for c in response.comments}
        assert counts == {str(chain[0].id): 1, str(root.id): 3}

    @pytest.mark.asyncio
    async def test_parent_filter_lists_direct_replies(self, unit_env):
        """parent_id returns one level below that comment."""
        # Arrange
        get_comments = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        root = await seed_complete_tree(post_repo, comment_repo, post, 3, 2)

        # Act
        response = await get_comments.execute(
            GetCommentsRequest(post_id=str(post.id), parent_id=str(root.id))
        )

        # Assert
        assert response.parent_id == str(root.id)
        assert response.total == 3
        assert all(c.parent_id == str(root.id) for c in response.comments)
        assert all(c.direct_reply_count == 3 for c in response.comments)

    @pytest.mark.asyncio
    async def test_reply_counts_use_one_lookup(self):
        """Direct reply counts for a whole level come from one batched call."""
        # Arrange
        store = InMemoryStore()
        comment_repo = CountingCommentRepository(store)
        get_comments = GetCommentsUseCase(comment_service=CommentService(comment_repo))
        post = make_post()
        await seed_complete_tree(
            InMemoryPostRepository(store), comment_repo, post, 4, 2
        )

        # Act
        response = await get_comments.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        assert response.total == 21
        assert comment_repo.find_children_calls == 1

    @pytest.mark.asyncio
    async def test_unknown_parent_is_not_found(self, unit_env):
        """A parent that isn't on the post raises NotFoundError."""
        get_comments = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(NotFoundError):
            await get_comments.execute(
                GetCommentsRequest(post_id=str(uuid4()), parent_id=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_both_filters_rejected(self, unit_env):
        """parent_id and roots_only can't be combined."""
        get_comments = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(ValueError):
            await get_comments.execute(
                GetCommentsRequest(
                    post_id=str(uuid4()), parent_id=str(uuid4()), roots_only=True
                )
            )
