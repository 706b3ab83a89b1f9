"""Application layer DI providers."""

from dishka import Scope, provide

from replytree.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
    ReconcileCommentCountUseCase,
    UpdateCommentUseCase,
)
from replytree.application.usecase.post import CreatePostUseCase, GetPostUseCase
from replytree.config import TraversalSettings
from replytree.domain.service import (
    CascadingDeleteCoordinator,
    CommentService,
    CounterReconciler,
    PostService,
    SubtreeSizeCounter,
)
from replytree.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, post_service: PostService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self,
        comment_service: CommentService,
        subtree_counter: SubtreeSizeCounter,
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(
            comment_service=comment_service,
            subtree_counter=subtree_counter,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        cascading_delete: CascadingDeleteCoordinator,
        traversal_settings: TraversalSettings,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            cascading_delete=cascading_delete,
            traversal_settings=traversal_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_reconcile_comment_count_use_case(
        self,
        counter_reconciler: CounterReconciler,
        traversal_settings: TraversalSettings,
    ) -> ReconcileCommentCountUseCase:
        """Provide reconcile comment count use case."""
        return ReconcileCommentCountUseCase(
            counter_reconciler=counter_reconciler,
            traversal_settings=traversal_settings,
        )
