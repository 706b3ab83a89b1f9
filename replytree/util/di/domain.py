"""Domain layer DI providers."""

from dishka import Scope, provide

from replytree.config import TraversalSettings
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.domain.service import (
    CascadingDeleteCoordinator,
    CommentService,
    CounterReconciler,
    PostService,
    SubtreeSizeCounter,
)
from replytree.domain.value import TraversalLimits
from replytree.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_subtree_counter(
        self,
        comment_repository: CommentRepository,
        traversal_settings: TraversalSettings,
    ) -> SubtreeSizeCounter:
        """Provide subtree size counter with the read-path ceilings."""
        return SubtreeSizeCounter(
            comment_repository=comment_repository,
            default_limits=TraversalLimits(
                max_nodes=traversal_settings.max_nodes,
                max_depth=traversal_settings.max_depth,
            ),
        )

    @provide
    def get_cascading_delete_coordinator(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
    ) -> CascadingDeleteCoordinator:
        """Provide cascading delete coordinator."""
        return CascadingDeleteCoordinator(
            comment_repository=comment_repository,
            post_repository=post_repository,
        )

    @provide
    def get_counter_reconciler(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        subtree_counter: SubtreeSizeCounter,
        traversal_settings: TraversalSettings,
    ) -> CounterReconciler:
        """Provide counter reconciler with the reconciliation ceiling."""
        return CounterReconciler(
            comment_repository=comment_repository,
            post_repository=post_repository,
            subtree_counter=subtree_counter,
            limits=TraversalLimits(max_nodes=traversal_settings.reconcile_max_nodes),
        )
