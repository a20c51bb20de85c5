"""Protocol shared by repositories of documents with nested collections."""

from typing import Any, Protocol, Sequence
from uuid import UUID


class ICollectionRepository(Protocol):
    """Versioned writes of a single nested collection on a parent document."""

    async def replace_collection(
        self,
        id: UUID,
        attribute: str,
        entries: Sequence[Any],
        expected_version: int,
    ) -> bool:
        """Store ``entries`` as the collection only if the parent is still at
        ``expected_version``, bumping the version. Returns False when another
        writer got there first."""
        ...
