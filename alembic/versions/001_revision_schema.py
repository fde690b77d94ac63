"""Revision schema

Revision ID: 001_revision_schema
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_revision_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ==========================================================================
    # ENUM TYPES
    # ==========================================================================
    op.execute("""
        CREATE TYPE entity_type AS ENUM ('Author', 'Edition', 'EditionGroup', 'Publisher', 'Work')
    """)

    # ==========================================================================
    # REVISIONS
    # ==========================================================================
    op.execute("""
        CREATE TABLE revision (
            id BIGSERIAL PRIMARY KEY,
            author_id INTEGER NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_revision_author ON revision(author_id)")
    op.execute("CREATE INDEX idx_revision_created_at ON revision(created_at DESC)")

    op.execute("""
        CREATE TABLE note (
            id BIGSERIAL PRIMARY KEY,
            revision_id BIGINT NOT NULL REFERENCES revision(id) ON DELETE CASCADE,
            author_id INTEGER NOT NULL,
            content TEXT NOT NULL CHECK (length(btrim(content)) > 0),
            posted_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX idx_note_revision ON note(revision_id)")

    # ==========================================================================
    # ENTITIES
    # ==========================================================================
    op.execute("""
        CREATE TABLE entity (
            bbid UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            type entity_type NOT NULL,
            name VARCHAR(255)
        )
    """)

    # One row per (revision, entity): the entity snapshot at that revision
    op.execute("""
        CREATE TABLE entity_revision (
            revision_id BIGINT NOT NULL REFERENCES revision(id) ON DELETE CASCADE,
            bbid UUID NOT NULL REFERENCES entity(bbid) ON DELETE CASCADE,
            data JSONB NOT NULL DEFAULT '{}'::jsonb,
            parent_revision_id BIGINT REFERENCES revision(id),
            PRIMARY KEY (revision_id, bbid)
        )
    """)
    op.execute("CREATE INDEX idx_entity_revision_bbid ON entity_revision(bbid)")

    # ==========================================================================
    # LOOKUPS (types, genders, areas, languages)
    # ==========================================================================
    op.execute("""
        CREATE TABLE lookup_value (
            category VARCHAR(50) NOT NULL,
            id INTEGER NOT NULL,
            label VARCHAR(255) NOT NULL,
            PRIMARY KEY (category, id)
        )
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS lookup_value")
    op.execute("DROP TABLE IF EXISTS entity_revision")
    op.execute("DROP TABLE IF EXISTS entity")
    op.execute("DROP TABLE IF EXISTS note")
    op.execute("DROP TABLE IF EXISTS revision")
    op.execute("DROP TYPE IF EXISTS entity_type")
