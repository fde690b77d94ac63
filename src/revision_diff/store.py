"""
Revision store contract and an in-memory implementation.

The engine never fetches data itself; callers hand it a store that
satisfies RevisionStore.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol

from .diffing import compute_changes
from .models import EntityKind, EntityRevision, Note, RawChange, Revision


class RevisionStore(Protocol):
    """Read access to revisions plus note creation."""

    async def get_revision(self, revision_id: int) -> Optional[Revision]:
        ...

    async def get_entity_revisions(
        self,
        kind: EntityKind,
        revision_id: int
    ) -> list[EntityRevision]:
        ...

    async def get_parent(self, entity_revision: EntityRevision) -> Optional[EntityRevision]:
        ...

    async def diff(
        self,
        entity_revision: EntityRevision,
        parent: Optional[EntityRevision]
    ) -> list[RawChange]:
        ...

    async def create_note(self, revision_id: int, author_id: int, content: str) -> Note:
        ...


class InMemoryRevisionStore:
    """
    Revision store backed by plain dicts.

    Example:
        >>> store = InMemoryRevisionStore(
        ...     revisions=[Revision(id=42)],
        ...     entity_revisions=[author_revision],
        ... )
    """

    def __init__(
        self,
        revisions: Iterable[Revision] = (),
        entity_revisions: Iterable[EntityRevision] = ()
    ):
        self.revisions: dict[int, Revision] = {r.id: r for r in revisions}
        self.entity_revisions: list[EntityRevision] = list(entity_revisions)
        self._next_note_id = 1

    def add_revision(self, revision: Revision) -> None:
        self.revisions[revision.id] = revision

    def add_entity_revision(self, entity_revision: EntityRevision) -> None:
        self.entity_revisions.append(entity_revision)

    async def get_revision(self, revision_id: int) -> Optional[Revision]:
        return self.revisions.get(revision_id)

    async def get_entity_revisions(
        self,
        kind: EntityKind,
        revision_id: int
    ) -> list[EntityRevision]:
        return [
            row for row in self.entity_revisions
            if row.kind == kind and row.revision_id == revision_id
        ]

    async def get_parent(self, entity_revision: EntityRevision) -> Optional[EntityRevision]:
        if entity_revision.parent_revision_id is None:
            return None
        for row in self.entity_revisions:
            if (
                row.revision_id == entity_revision.parent_revision_id
                and row.entity.bbid == entity_revision.entity.bbid
            ):
                return row
        return None

    async def diff(
        self,
        entity_revision: EntityRevision,
        parent: Optional[EntityRevision]
    ) -> list[RawChange]:
        return compute_changes(parent.data if parent else None, entity_revision.data)

    async def create_note(self, revision_id: int, author_id: int, content: str) -> Note:
        note = Note(
            id=self._next_note_id,
            revision_id=revision_id,
            author_id=author_id,
            content=content,
            posted_at=datetime.now(timezone.utc),
        )
        self._next_note_id += 1
        self.revisions[revision_id].notes.append(note)
        return note
