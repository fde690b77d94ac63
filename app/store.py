"""
SQL-backed revision store.

Reads the tables created by the revision schema migration. Each call opens
its own session so concurrent entity-kind lookups never share one.
"""

import logging
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.revision_diff import (
    EntityKind,
    EntityMetadata,
    EntityRevision,
    Note,
    RawChange,
    ReferenceKind,
    Revision,
    StaticReferenceResolver,
    compute_changes,
)

logger = logging.getLogger(__name__)

_REVISION_SQL = text("""
    SELECT id, author_id, created_at
    FROM revision
    WHERE id = :revision_id
""")

_NOTES_SQL = text("""
    SELECT id, revision_id, author_id, content, posted_at
    FROM note
    WHERE revision_id = :revision_id
    ORDER BY posted_at, id
""")

_ENTITY_REVISION_COLUMNS = """
    SELECT er.revision_id, CAST(er.bbid AS TEXT) AS bbid, CAST(e.type AS TEXT) AS type, e.name,
           er.data, er.parent_revision_id
    FROM entity_revision er
    JOIN entity e ON e.bbid = er.bbid
"""

_KIND_ROWS_SQL = text(
    _ENTITY_REVISION_COLUMNS
    + "WHERE er.revision_id = :revision_id AND CAST(e.type AS TEXT) = :kind ORDER BY er.bbid"
).columns(data=JSONB)

_PARENT_ROW_SQL = text(
    _ENTITY_REVISION_COLUMNS
    + "WHERE er.revision_id = :revision_id AND CAST(er.bbid AS TEXT) = :bbid"
).columns(data=JSONB)

_INSERT_NOTE_SQL = text("""
    INSERT INTO note (revision_id, author_id, content)
    VALUES (:revision_id, :author_id, :content)
    RETURNING id, revision_id, author_id, content, posted_at
""")

_LOOKUP_SQL = text("SELECT category, id, label FROM lookup_value")


def _entity_revision(row: Any) -> EntityRevision:
    kind = EntityKind(row.type)
    return EntityRevision(
        revision_id=row.revision_id,
        kind=kind,
        entity=EntityMetadata(bbid=row.bbid, kind=kind, name=row.name),
        data=row.data or {},
        parent_revision_id=row.parent_revision_id,
    )


class SqlRevisionStore:
    """RevisionStore over the revision tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_revision(self, revision_id: int) -> Optional[Revision]:
        async with self._session_factory() as session:
            row = (await session.execute(
                _REVISION_SQL, {"revision_id": revision_id}
            )).first()
            if row is None:
                return None

            notes = (await session.execute(
                _NOTES_SQL, {"revision_id": revision_id}
            )).all()

        return Revision(
            id=row.id,
            author_id=row.author_id,
            created_at=row.created_at,
            notes=[Note.model_validate(note._asdict()) for note in notes],
        )

    async def get_entity_revisions(
        self,
        kind: EntityKind,
        revision_id: int
    ) -> list[EntityRevision]:
        async with self._session_factory() as session:
            rows = (await session.execute(
                _KIND_ROWS_SQL, {"revision_id": revision_id, "kind": kind.value}
            )).all()
        return [_entity_revision(row) for row in rows]

    async def get_parent(self, entity_revision: EntityRevision) -> Optional[EntityRevision]:
        if entity_revision.parent_revision_id is None:
            return None

        async with self._session_factory() as session:
            row = (await session.execute(
                _PARENT_ROW_SQL,
                {
                    "revision_id": entity_revision.parent_revision_id,
                    "bbid": entity_revision.entity.bbid,
                },
            )).first()

        if row is None:
            logger.warning(
                "Parent revision %s of entity %s is missing",
                entity_revision.parent_revision_id,
                entity_revision.entity.bbid,
            )
            return None
        return _entity_revision(row)

    async def diff(
        self,
        entity_revision: EntityRevision,
        parent: Optional[EntityRevision]
    ) -> list[RawChange]:
        return compute_changes(parent.data if parent else None, entity_revision.data)

    async def create_note(self, revision_id: int, author_id: int, content: str) -> Note:
        async with self._session_factory() as session:
            row = (await session.execute(
                _INSERT_NOTE_SQL,
                {"revision_id": revision_id, "author_id": author_id, "content": content},
            )).one()
            await session.commit()
        return Note.model_validate(row._asdict())


async def load_reference_resolver(session: AsyncSession) -> StaticReferenceResolver:
    """Build a resolver from the lookup_value table."""
    tables: dict[ReferenceKind, dict[Any, str]] = {}
    rows = (await session.execute(_LOOKUP_SQL)).all()

    for row in rows:
        try:
            reference = ReferenceKind(row.category)
        except ValueError:
            logger.debug("Ignoring lookup category %s", row.category)
            continue
        tables.setdefault(reference, {})[row.id] = row.label

    return StaticReferenceResolver(tables)
