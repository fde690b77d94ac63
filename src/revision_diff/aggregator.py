"""Per-entity aggregation of formatted changes."""

from typing import Iterable, Optional

from .classifiers import classify
from .models import (
    EntityChangeSet,
    EntityDiffBlock,
    EntityKind,
    EntityMetadata,
    FormattedEntry,
    RawChange,
)
from .references import ReferenceResolver


def aggregate(
    entity_type: EntityKind,
    raw_changes: Iterable[RawChange],
    entity: EntityMetadata,
    resolver: Optional[ReferenceResolver] = None
) -> EntityDiffBlock:
    """
    Format all raw changes of one entity revision into a block.

    Unrecognized changes are dropped; the rest keep their input order.
    An entity with no changes yields a block with no entries.
    """
    entity_type = EntityKind(entity_type)
    formatted: list[FormattedEntry] = []
    for change in raw_changes:
        entry = classify(entity_type, change, resolver)
        if entry is not None:
            formatted.append(entry)

    return EntityDiffBlock(
        entity_type=entity_type,
        entity_id=entity.bbid,
        entity=entity,
        formatted_changes=formatted,
    )


def format_entity_diffs(
    change_sets: Iterable[EntityChangeSet],
    entity_type: EntityKind,
    resolver: Optional[ReferenceResolver] = None
) -> list[EntityDiffBlock]:
    """Aggregate every entity revision of one kind."""
    return [
        aggregate(entity_type, change_set.changes, change_set.entity, resolver)
        for change_set in change_sets
    ]
