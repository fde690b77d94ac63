"""
Pydantic models for revision diffing.

Raw changes come from comparing an entity snapshot with its parent.
Formatted changes are the human-readable rows shown for a revision.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EntityKind(str, Enum):
    """Entity record types that carry their own revision history."""

    AUTHOR = "Author"
    EDITION = "Edition"
    EDITION_GROUP = "EditionGroup"
    PUBLISHER = "Publisher"
    WORK = "Work"


# Order in which entity blocks are merged into a revision diff
ENTITY_KIND_ORDER: tuple[EntityKind, ...] = (
    EntityKind.AUTHOR,
    EntityKind.EDITION,
    EntityKind.EDITION_GROUP,
    EntityKind.PUBLISHER,
    EntityKind.WORK,
)


class ChangeKind(str, Enum):
    """How a single field differs from the parent revision."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class ChangePath(BaseModel):
    """
    Identifies which field changed.

    Built from a list of segments or a dotted string:
        ChangePath(segments=["beginArea", "name"])
        ChangePath.model_validate("beginArea.name")

    Only the root segment matters for classification; a change anywhere
    under a compound field belongs to the whole field.
    """

    model_config = ConfigDict(frozen=True)

    segments: tuple[Union[str, int], ...] = Field(
        ...,
        min_length=1,
        description="Property names from the entity root (list indices allowed below the root)"
    )

    @model_validator(mode="before")
    @classmethod
    def coerce_segments(cls, data: Any) -> Any:
        """Accept bare lists, tuples and dotted strings."""
        if isinstance(data, str):
            return {"segments": tuple(data.split("."))}
        if isinstance(data, (list, tuple)):
            return {"segments": tuple(data)}
        if isinstance(data, ChangePath):
            return {"segments": data.segments}
        return data

    @property
    def root(self) -> str:
        return str(self.segments[0])

    @property
    def leaf(self) -> Union[str, int]:
        return self.segments[-1]

    @property
    def is_root(self) -> bool:
        return len(self.segments) == 1

    def __str__(self) -> str:
        return ".".join(str(segment) for segment in self.segments)


class RawChange(BaseModel):
    """
    A single field-level difference between a revision and its parent.

    Examples:
        {"path": ["endDate"], "kind": "modified", "lhs": "2001-01-01", "rhs": "2002-02-02"}
        {"path": ["beginArea", "name"], "kind": "added", "rhs": "London"}
    """

    model_config = ConfigDict(frozen=True)

    path: ChangePath = Field(..., description="Field that changed")
    kind: ChangeKind = Field(..., description="Whether the field was added, removed or modified")
    lhs: Any = Field(default=None, description="Value in the parent revision")
    rhs: Any = Field(default=None, description="Value in this revision")


class FormattedChange(BaseModel):
    """A scalar field change rendered for display."""

    model_config = ConfigDict(frozen=True)

    shape: Literal["value"] = "value"
    label: str = Field(description="Human-readable field name")
    kind: ChangeKind
    rendered_old: Any = Field(default=None, description="Displayable old value")
    rendered_new: Any = Field(default=None, description="Displayable new value")


class SetChange(BaseModel):
    """A change to a set-valued relationship field rendered for display."""

    model_config = ConfigDict(frozen=True)

    shape: Literal["set"] = "set"
    label: str = Field(description="Human-readable field name")
    kind: ChangeKind
    additions: list[Any] = Field(
        default_factory=list,
        description="Members present only in the new set"
    )
    removals: list[Any] = Field(
        default_factory=list,
        description="Members present only in the old set"
    )


FormattedEntry = Union[FormattedChange, SetChange]


class EntityMetadata(BaseModel):
    """Identity and display info of the entity a revision belongs to."""

    model_config = ConfigDict(frozen=True)

    bbid: str = Field(description="Stable entity identifier")
    kind: EntityKind
    name: Optional[str] = Field(default=None, description="Default alias or display name")


class EntityDiffBlock(BaseModel):
    """All formatted changes of one entity within one revision."""

    model_config = ConfigDict(frozen=True)

    entity_type: EntityKind
    entity_id: str
    entity: Optional[EntityMetadata] = None
    formatted_changes: list[FormattedEntry] = Field(default_factory=list)


class Note(BaseModel):
    """An annotation left on a revision."""

    id: Optional[int] = None
    revision_id: int
    author_id: int
    content: str
    posted_at: Optional[datetime] = None


class Revision(BaseModel):
    """A global revision record, possibly touching several entities."""

    id: int
    author_id: Optional[int] = None
    created_at: Optional[datetime] = None
    notes: list[Note] = Field(default_factory=list)


class EntityRevision(BaseModel):
    """One per-kind revision row: an entity snapshot at a given revision."""

    revision_id: int
    kind: EntityKind
    entity: EntityMetadata
    data: dict[str, Any] = Field(default_factory=dict)
    parent_revision_id: Optional[int] = None


class EntityChangeSet(BaseModel):
    """Raw changes of one entity revision against its parent."""

    entity: EntityMetadata
    changes: list[RawChange] = Field(default_factory=list)


class RevisionDiffSet(BaseModel):
    """Formatted diff of a global revision, ordered by entity kind."""

    revision: Revision
    blocks: list[EntityDiffBlock] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not any(block.formatted_changes for block in self.blocks)
