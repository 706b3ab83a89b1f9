"""Actor identity supplied by the upstream authentication layer."""

from uuid import UUID

from fastapi import HTTPException, status


def require_user_id(x_user_id: str | None) -> str:
    """Return the authenticated user ID or raise 401.

    Args:
        x_user_id: Value of the X-User-Id header

    Returns:
        User ID as a UUID string

    Raises:
        HTTPException: If the header is missing or not a UUID
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    try:
        UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id",
        )
    return x_user_id
