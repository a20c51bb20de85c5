"""Ownership-checked mutation of nested collections.

Likes and comments on a post, and experience and education entries on a
profile, are ordered lists embedded in their parent document. They all follow
the same protocol:

* insert: run the collection's admission check, then prepend the entry
  (collections are kept most-recent-first);
* remove: locate exactly one entry, check that the actor may remove it, then
  drop it by identity, never by structural equality.

``NestedCollection`` describes one such collection. ``CollectionMutator`` runs
the load, mutate, compare-and-swap cycle against a repository so that
concurrent writers to the same parent never overwrite each other's entries.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Protocol, TypeVar
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    ConcurrentModificationError,
    DuplicateEntryError,
    NotFoundError,
)
from domain.repositories.collection_repository import ICollectionRepository
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class HasId(Protocol):
    id: UUID


class VersionedDocument(Protocol):
    id: UUID
    version: int


EntryT = TypeVar("EntryT", bound=HasId)
ParentT = TypeVar("ParentT", bound=VersionedDocument)
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class NestedCollection(Generic[ParentT, EntryT]):
    """Policy for one nested collection.

    Attributes:
        attribute: Name of the list attribute on the parent entity.
        not_found: Error factory used when no entry matches a removal.
        matches: ``(entry, actor, key) -> bool`` locating the removal target.
        may_remove: ``(parent, entry, actor) -> bool`` authorization rule.
        admit: Optional ``(entries, actor) -> bool`` admission check run
            before insert. A rejected insert raises DuplicateEntryError.
        duplicate_message: Message for a rejected insert.
        forbidden_message: Message for a rejected removal.
    """

    attribute: str
    not_found: Callable[[str], NotFoundError]
    matches: Callable[[EntryT, UUID, Any], bool]
    may_remove: Callable[[ParentT, EntryT, UUID], bool]
    admit: Callable[[list[EntryT], UUID], bool] | None = None
    duplicate_message: str = "Entry already exists"
    forbidden_message: str = "You are not authorized to remove this entry"

    def entries(self, parent: ParentT) -> list[EntryT]:
        return getattr(parent, self.attribute)  # type: ignore[no-any-return]

    def insert(self, parent: ParentT, actor: UUID, entry: EntryT) -> EntryT:
        """Prepend ``entry`` if the admission check lets it in."""
        entries = self.entries(parent)
        if self.admit is not None and not self.admit(entries, actor):
            raise DuplicateEntryError(
                self.duplicate_message,
                {"collection": self.attribute, "parent_id": str(parent.id)},
            )
        entries.insert(0, entry)
        return entry

    def remove(self, parent: ParentT, actor: UUID, key: Any) -> EntryT:
        """Remove the single entry matching ``key`` on behalf of ``actor``."""
        entries = self.entries(parent)
        index = next(
            (i for i, entry in enumerate(entries) if self.matches(entry, actor, key)),
            None,
        )
        if index is None:
            raise self.not_found(str(key))

        target = entries[index]
        if not self.may_remove(parent, target, actor):
            raise AuthorizationError(self.forbidden_message)

        del entries[index]
        return target


class CollectionMutator:
    """Applies nested collection mutations with optimistic concurrency.

    Each attempt reloads the parent, re-applies the mutation in memory and
    writes the collection back only if the parent's version is unchanged.
    Losing the race re-runs the cycle, up to ``max_attempts`` times.
    """

    def __init__(self, max_attempts: int = 3) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts

    async def apply(
        self,
        uow: IUnitOfWork,
        repository: ICollectionRepository,
        load: Callable[[], Awaitable[ParentT | None]],
        missing: Callable[[], NotFoundError],
        collection: NestedCollection[ParentT, Any],
        operation: Callable[[ParentT], ResultT],
    ) -> ParentT:
        """Load the parent, run ``operation`` on it and persist the collection.

        Domain errors raised by ``operation`` (not found, forbidden,
        duplicate) propagate unchanged and nothing is written.
        """
        for attempt in range(1, self._max_attempts + 1):
            parent = await load()
            if parent is None:
                raise missing()

            operation(parent)

            written = await repository.replace_collection(
                parent.id,
                collection.attribute,
                collection.entries(parent),
                parent.version,
            )
            if written:
                parent.version += 1
                await uow.commit()
                return parent

            logger.info(
                "nested_collection_conflict",
                collection=collection.attribute,
                parent_id=str(parent.id),
                attempt=attempt,
            )

        logger.warning(
            "nested_collection_write_abandoned",
            collection=collection.attribute,
            attempts=self._max_attempts,
        )
        raise ConcurrentModificationError(collection.attribute)
