"""
Revision Diff Engine

Classifies the field-level changes of an entity revision against its
parent and renders them as entity-type-aware, human-readable rows.
"""

__version__ = "0.1.0"

from .aggregator import aggregate, format_entity_diffs
from .classifiers import classify, recognized_fields
from .diffing import compute_changes
from .exceptions import InvalidNoteError, RevisionDiffError, RevisionNotFoundError
from .models import (
    ENTITY_KIND_ORDER,
    ChangeKind,
    ChangePath,
    EntityChangeSet,
    EntityDiffBlock,
    EntityKind,
    EntityMetadata,
    EntityRevision,
    FormattedChange,
    Note,
    RawChange,
    Revision,
    RevisionDiffSet,
    SetChange,
)
from .references import ReferenceKind, ReferenceResolver, StaticReferenceResolver
from .service import add_note, assemble, get_revision_diff
from .store import InMemoryRevisionStore, RevisionStore

__all__ = [
    "__version__",
    "ENTITY_KIND_ORDER",
    "ChangeKind",
    "ChangePath",
    "EntityChangeSet",
    "EntityDiffBlock",
    "EntityKind",
    "EntityMetadata",
    "EntityRevision",
    "FormattedChange",
    "Note",
    "RawChange",
    "Revision",
    "RevisionDiffSet",
    "SetChange",
    "ReferenceKind",
    "ReferenceResolver",
    "StaticReferenceResolver",
    "RevisionStore",
    "InMemoryRevisionStore",
    "InvalidNoteError",
    "RevisionDiffError",
    "RevisionNotFoundError",
    "aggregate",
    "assemble",
    "add_note",
    "classify",
    "compute_changes",
    "format_entity_diffs",
    "get_revision_diff",
    "recognized_fields",
]
