"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.revisions import get_reference_resolver, get_revision_store
from app.main import app
from src.revision_diff import (
    EntityKind,
    EntityMetadata,
    EntityRevision,
    InMemoryRevisionStore,
    ReferenceKind,
    Revision,
    StaticReferenceResolver,
)

AUTHOR_BBID = "a1a1a1a1-0000-4000-8000-000000000001"
WORK_BBID = "b2b2b2b2-0000-4000-8000-000000000002"


@pytest.fixture
def resolver():
    """Lookup tables for type, gender and area references."""
    return StaticReferenceResolver({
        ReferenceKind.GENDER: {1: "Male", 2: "Female", 3: "Other"},
        ReferenceKind.AUTHOR_TYPE: {1: "Person", 2: "Group"},
        ReferenceKind.PUBLISHER_TYPE: {1: "Publisher", 2: "Imprint"},
        ReferenceKind.WORK_TYPE: {1: "Novel", 2: "Short Story"},
        ReferenceKind.EDITION_GROUP_TYPE: {1: "Book", 2: "Leaflet"},
        ReferenceKind.EDITION_FORMAT: {1: "Paperback", 2: "Hardcover"},
        ReferenceKind.EDITION_STATUS: {1: "Official", 2: "Draft"},
        ReferenceKind.AREA: {10: "London", 20: "Paris"},
    })


@pytest.fixture
def author_entity():
    return EntityMetadata(bbid=AUTHOR_BBID, kind=EntityKind.AUTHOR, name="Jane Doe")


@pytest.fixture
def work_entity():
    return EntityMetadata(bbid=WORK_BBID, kind=EntityKind.WORK, name="A Novel")


@pytest.fixture
def store(author_entity, work_entity):
    """
    Store holding revision 41 (creation) and revision 42 (edit).

    Revision 42 only changes the author's end date.
    """
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return InMemoryRevisionStore(
        revisions=[
            Revision(id=41, author_id=7, created_at=created),
            Revision(id=42, author_id=7, created_at=created),
        ],
        entity_revisions=[
            EntityRevision(
                revision_id=41,
                kind=EntityKind.AUTHOR,
                entity=author_entity,
                data={"beginDate": "1950-05-05", "endDate": "2001-01-01", "ended": True},
            ),
            EntityRevision(
                revision_id=42,
                kind=EntityKind.AUTHOR,
                entity=author_entity,
                data={"beginDate": "1950-05-05", "endDate": "2002-02-02", "ended": True},
                parent_revision_id=41,
            ),
            EntityRevision(
                revision_id=41,
                kind=EntityKind.WORK,
                entity=work_entity,
                data={"type": {"id": 1}, "languageSet": {"languages": ["en"]}},
            ),
        ],
    )


@pytest.fixture
async def client(store, resolver):
    """Async test client backed by the in-memory store."""
    app.dependency_overrides[get_revision_store] = lambda: store
    app.dependency_overrides[get_reference_resolver] = lambda: resolver
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
