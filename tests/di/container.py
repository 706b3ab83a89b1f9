"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from replytree.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables (DATABASE__URL for
    integration tests).

    Args:
        unmock: Components to use production implementations for.
                All others use mocks if available.

    Returns:
        Configured test container

    Raises:
        ValueError: If unmock names an unknown component

    Examples:
        # Unit tests - in-memory persistence
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component = getattr(base, "__mock_component__", None)
        use_mock = component is not None and component not in unmock
        provider_instances.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*provider_instances)


def _validate_unmock(unmock: set[Component]) -> None:
    known = {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
