"""
Entity-kind-aware change classification.

Each entity kind has a table mapping a path root to the formatter that
renders it. Changes to fields outside the table (timestamps, foreign keys
and other bookkeeping) are dropped, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .formatters import base
from .formatters.sets import (
    SetFormatter,
    alias_set,
    identifier_set,
    language_set,
    publisher_set,
    release_event_set,
)
from .models import EntityKind, FormattedEntry, RawChange
from .references import ReferenceKind, ReferenceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldRule:
    """How to render changes to one recognized field."""

    label: str
    render: Callable[[RawChange, Optional[ReferenceResolver]], Optional[FormattedEntry]]

    def apply(
        self,
        change: RawChange,
        resolver: Optional[ReferenceResolver] = None
    ) -> Optional[FormattedEntry]:
        return self.render(change, resolver)


# --- Rule builders ---

def scalar(label: str) -> FieldRule:
    return FieldRule(label, lambda change, _: base.format_scalar_change(change, label))


def ended() -> FieldRule:
    return FieldRule("Ended", lambda change, _: base.format_ended_change(change))


def typed(label: str, reference: ReferenceKind) -> FieldRule:
    return FieldRule(
        label,
        lambda change, resolver: base.format_type_change(change, label, reference, resolver)
    )


def gender() -> FieldRule:
    return FieldRule("Gender", lambda change, resolver: base.format_gender_change(change, resolver))


def area(label: str = "Area") -> FieldRule:
    return FieldRule(
        label,
        lambda change, resolver: base.format_area_change(change, label, resolver)
    )


def member_set(formatter: SetFormatter) -> FieldRule:
    def render(change, _):
        if not formatter.changed(change):
            return None
        return formatter.format(change)

    return FieldRule(formatter.label, render)


# --- Classifier tables ---

# Fields every entity kind carries
COMMON_RULES: dict[str, FieldRule] = {
    "annotation": scalar("Annotation"),
    "disambiguation": scalar("Disambiguation"),
    alias_set.field: member_set(alias_set),
    identifier_set.field: member_set(identifier_set),
}

AUTHOR_RULES: dict[str, FieldRule] = {
    "beginDate": scalar("Begin Date"),
    "endDate": scalar("End Date"),
    "gender": gender(),
    "ended": ended(),
    "type": typed("Author Type", ReferenceKind.AUTHOR_TYPE),
    "beginArea": area("Begin Area"),
    "endArea": area("End Area"),
}

EDITION_RULES: dict[str, FieldRule] = {
    "editionGroupBbid": scalar("EditionGroup"),
    publisher_set.field: member_set(publisher_set),
    release_event_set.field: member_set(release_event_set),
    language_set.field: member_set(language_set),
    **{
        dimension: scalar(base.humanize(dimension))
        for dimension in ("width", "height", "depth", "weight")
    },
    "pages": scalar("Page Count"),
    "editionFormat": typed("Edition Format", ReferenceKind.EDITION_FORMAT),
    "editionStatus": typed("Edition Status", ReferenceKind.EDITION_STATUS),
}

EDITION_GROUP_RULES: dict[str, FieldRule] = {
    "type": typed("Edition Group Type", ReferenceKind.EDITION_GROUP_TYPE),
}

PUBLISHER_RULES: dict[str, FieldRule] = {
    "beginDate": scalar("Begin Date"),
    "endDate": scalar("End Date"),
    "ended": ended(),
    "type": typed("Publisher Type", ReferenceKind.PUBLISHER_TYPE),
    "area": area(),
}

WORK_RULES: dict[str, FieldRule] = {
    language_set.field: member_set(language_set),
    "type": typed("Work Type", ReferenceKind.WORK_TYPE),
}

CLASSIFIERS: dict[EntityKind, dict[str, FieldRule]] = {
    kind: {**rules, **COMMON_RULES}
    for kind, rules in (
        (EntityKind.AUTHOR, AUTHOR_RULES),
        (EntityKind.EDITION, EDITION_RULES),
        (EntityKind.EDITION_GROUP, EDITION_GROUP_RULES),
        (EntityKind.PUBLISHER, PUBLISHER_RULES),
        (EntityKind.WORK, WORK_RULES),
    )
}


def recognized_fields(kind: EntityKind) -> frozenset[str]:
    """Path roots that the kind's classifier renders."""
    return frozenset(CLASSIFIERS[EntityKind(kind)])


def classify(
    kind: EntityKind,
    change: RawChange,
    resolver: Optional[ReferenceResolver] = None
) -> Optional[FormattedEntry]:
    """
    Format a raw change for an entity kind.

    Args:
        kind: Entity kind the change belongs to
        change: Raw change against the parent revision
        resolver: Lookup resolver for type, gender and area references

    Returns:
        The formatted entry, or None when the field is not displayed

    Example:
        >>> change = RawChange(path=["pages"], kind="modified", lhs=200, rhs=210)
        >>> classify(EntityKind.EDITION, change).label
        'Page Count'
    """
    kind = EntityKind(kind)
    rule = CLASSIFIERS[kind].get(change.path.root)
    if rule is None:
        logger.debug("Dropping unrecognized %s field %s", kind.value, change.path)
        return None
    entry = rule.apply(change, resolver)
    if entry is None:
        logger.debug("Dropping %s change %s with nothing to show", kind.value, change.path)
    return entry


def classify_author_change(change, resolver=None):
    return classify(EntityKind.AUTHOR, change, resolver)


def classify_edition_change(change, resolver=None):
    return classify(EntityKind.EDITION, change, resolver)


def classify_edition_group_change(change, resolver=None):
    return classify(EntityKind.EDITION_GROUP, change, resolver)


def classify_publisher_change(change, resolver=None):
    return classify(EntityKind.PUBLISHER, change, resolver)


def classify_work_change(change, resolver=None):
    return classify(EntityKind.WORK, change, resolver)
