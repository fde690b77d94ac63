"""
Revision diff service.

Main entry point for turning a global revision into formatted,
per-entity diff blocks.
"""

import asyncio
import logging
from typing import Mapping, Optional, Sequence

from .aggregator import format_entity_diffs
from .exceptions import InvalidNoteError, RevisionNotFoundError
from .models import (
    ENTITY_KIND_ORDER,
    EntityChangeSet,
    EntityDiffBlock,
    EntityKind,
    EntityRevision,
    Note,
    Revision,
    RevisionDiffSet,
)
from .references import ReferenceResolver
from .store import RevisionStore

logger = logging.getLogger(__name__)


def assemble(
    revision: Revision,
    per_kind: Mapping[EntityKind, Sequence[EntityChangeSet]],
    resolver: Optional[ReferenceResolver] = None
) -> RevisionDiffSet:
    """
    Merge the change sets of every entity kind into one revision diff.

    Blocks are ordered Author, Edition, EditionGroup, Publisher, Work,
    whatever order the mapping was filled in. Kinds absent from the
    mapping contribute nothing.
    """
    blocks: list[EntityDiffBlock] = []
    for kind in ENTITY_KIND_ORDER:
        blocks.extend(format_entity_diffs(per_kind.get(kind, ()), kind, resolver))

    return RevisionDiffSet(revision=revision, blocks=blocks)


async def _diff_with_parent(
    store: RevisionStore,
    entity_revision: EntityRevision
) -> EntityChangeSet:
    parent = await store.get_parent(entity_revision)
    changes = await store.diff(entity_revision, parent)
    return EntityChangeSet(entity=entity_revision.entity, changes=changes)


async def resolve_kind_changes(
    store: RevisionStore,
    kind: EntityKind,
    revision_id: int
) -> list[EntityChangeSet]:
    """Diff every entity revision of one kind against its parent."""
    rows = await store.get_entity_revisions(kind, revision_id)
    return list(await asyncio.gather(*(_diff_with_parent(store, row) for row in rows)))


async def get_revision_diff(
    revision_id: int,
    store: RevisionStore,
    resolver: Optional[ReferenceResolver] = None,
    fail_fast: bool = False
) -> RevisionDiffSet:
    """
    Compute the formatted diff of a global revision.

    The base revision lookup and the five entity kinds are resolved
    concurrently. A kind whose resolution fails is logged and treated as
    empty so it cannot abort its siblings, unless fail_fast is set.

    Args:
        revision_id: Global revision id
        store: Revision store to read from
        resolver: Lookup resolver for type, gender and area references
        fail_fast: Re-raise the first entity-kind failure instead of isolating it

    Returns:
        RevisionDiffSet with one block per entity revision

    Raises:
        RevisionNotFoundError: If the revision does not exist

    Example:
        >>> diff = await get_revision_diff(42, store, resolver)
        >>> for block in diff.blocks:
        ...     print(block.entity_type, [c.label for c in block.formatted_changes])
    """
    revision, *branches = await asyncio.gather(
        store.get_revision(revision_id),
        *(resolve_kind_changes(store, kind, revision_id) for kind in ENTITY_KIND_ORDER),
        return_exceptions=True,
    )

    if isinstance(revision, BaseException):
        raise revision
    if revision is None:
        raise RevisionNotFoundError(revision_id)

    per_kind: dict[EntityKind, list[EntityChangeSet]] = {}
    for kind, result in zip(ENTITY_KIND_ORDER, branches):
        if isinstance(result, BaseException):
            if fail_fast or not isinstance(result, Exception):
                raise result
            logger.warning(
                "Skipping %s changes of revision %s",
                kind.value,
                revision_id,
                exc_info=result,
            )
            per_kind[kind] = []
        else:
            per_kind[kind] = result

    diff = assemble(revision, per_kind, resolver)

    logger.info(
        "Assembled revision diff | revision=%s blocks=%s changes=%s",
        revision_id,
        len(diff.blocks),
        sum(len(block.formatted_changes) for block in diff.blocks),
    )
    return diff


async def add_note(
    revision_id: int,
    author_id: int,
    content: str,
    store: RevisionStore
) -> Note:
    """
    Attach a note to an existing revision.

    Raises:
        InvalidNoteError: If the content is blank
        RevisionNotFoundError: If the revision does not exist
    """
    content = content.strip()
    if not content:
        raise InvalidNoteError("Note content must not be empty")

    if await store.get_revision(revision_id) is None:
        raise RevisionNotFoundError(revision_id)

    note = await store.create_note(revision_id, author_id, content)
    logger.info("Added note | revision=%s author=%s", revision_id, author_id)
    return note
