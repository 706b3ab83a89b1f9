#!/usr/bin/env python3
"""Recount comments and repair drifted post comment counters.

Usage:
    python scripts/reconcile_comment_counts.py            # every post
    python scripts/reconcile_comment_counts.py <post-id>  # selected posts

Each post is reconciled in its own transaction. Exits non-zero if any post
could not be reconciled.
"""

import argparse
import asyncio
import sys
from uuid import UUID

import logfire

from replytree.config import Settings, TraversalSettings
from replytree.domain.error import DomainError
from replytree.domain.repository import PostRepository
from replytree.domain.service import CounterReconciler
from replytree.domain.value import Deadline, PostId
from replytree.util.di.container import create_container
from replytree.util.logging import get_logger, setup_logging
from replytree.util.observability import configure_logfire

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "post_ids",
        nargs="*",
        type=UUID,
        help="Posts to reconcile (default: all posts)",
    )
    return parser.parse_args(argv)


async def reconcile_all(post_ids: list[PostId]) -> int:
    """Reconcile the given posts, or every post if none are given.

    Returns:
        Number of posts that failed to reconcile
    """
    container = create_container(web=False)

    try:
        if not post_ids:
            async with container() as request_container:
                post_repository = await request_container.get(PostRepository)
                post_ids = await post_repository.find_all_ids()

        traversal_settings = await container.get(TraversalSettings)
        failures = 0
        corrected = 0

        for post_id in post_ids:
            deadline = Deadline.after(traversal_settings.reconcile_deadline_seconds)
            try:
                async with container() as request_container:
                    reconciler = await request_container.get(CounterReconciler)
                    result = await reconciler.reconcile(post_id, deadline=deadline)
            except DomainError as e:
                failures += 1
                logger.error(f"Post {post_id}: reconciliation failed: {e}")
                continue

            if result.corrected:
                corrected += 1
                logger.info(
                    f"Post {post_id}: corrected {result.before} -> {result.after}"
                )
            elif result.approximate:
                logger.warning(
                    f"Post {post_id}: recount capped, left at {result.before}"
                )

        logfire.info(
            "Comment counter reconciliation finished",
            posts=len(post_ids),
            corrected=corrected,
            failures=failures,
        )
        return failures
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    failures = asyncio.run(reconcile_all([PostId(p) for p in args.post_ids]))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
