"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services receive repositories through their constructor and hold no
    comment or post state between calls.
    """
