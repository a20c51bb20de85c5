"""Identifier parsing shared by the resource services."""

from typing import Callable
from uuid import UUID

from core.exceptions import NotFoundError


def coerce_id(value: UUID | str, not_found: Callable[[str], NotFoundError]) -> UUID:
    """Parse a caller-supplied identifier.

    A malformed identifier is reported with the entity's not-found error, so
    callers see the same outcome as for an identifier that does not exist.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise not_found(str(value)) from None
