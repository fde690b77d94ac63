"""
Generic field formatters.

Each formatter takes a raw change and returns a FormattedChange. Formatters
trust the caller to have matched the path; they never re-validate it.
"""

import logging
import re
from typing import Any, Optional

from ..models import ChangeKind, FormattedChange, RawChange
from ..references import ReferenceKind, ReferenceResolver

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# Path leaves whose values are already display names
_NAME_LEAVES = frozenset({"name", "label"})

_WORD_BOUNDARY = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+")


def humanize(name: str) -> str:
    """
    Turn a field name into a display label.

    Examples:
        >>> humanize("width")
        'Width'
        >>> humanize("editionGroupBbid")
        'Edition Group Bbid'
        >>> humanize("page_count")
        'Page Count'
    """
    return " ".join(word.capitalize() for word in _WORD_BOUNDARY.findall(name))


def _row(change: RawChange, label: str, old: Any, new: Any) -> FormattedChange:
    """Build a row, blanking the side that does not exist for this kind."""
    if change.kind == ChangeKind.ADDED:
        old = None
    elif change.kind == ChangeKind.REMOVED:
        new = None
    return FormattedChange(
        label=label,
        kind=change.kind,
        rendered_old=old,
        rendered_new=new,
    )


def format_scalar_change(change: RawChange, label: str) -> FormattedChange:
    """Render numbers, strings and dates as they are."""
    return _row(change, label, change.lhs, change.rhs)


def _yes_no(value: Any) -> Optional[str]:
    if value is None:
        return None
    return "Yes" if value else "No"


def format_ended_change(change: RawChange) -> FormattedChange:
    """Render the boolean "ended" flag as Yes/No."""
    return _row(change, "Ended", _yes_no(change.lhs), _yes_no(change.rhs))


def _display_name(
    value: Any,
    reference: ReferenceKind,
    resolver: Optional[ReferenceResolver],
    by_name: bool = False,
) -> Optional[str]:
    """
    Resolve a reference value to its display name.

    Values can be the name itself (when the path ends in .name/.label),
    a dict carrying "label" or "name", a dict carrying "id", or a bare id.
    """
    if value is None:
        return None
    if by_name:
        return str(value)

    if isinstance(value, dict):
        for key in ("label", "name"):
            if value.get(key) is not None:
                return str(value[key])
        ref_id = value.get("id")
    else:
        ref_id = value

    name = resolver.resolve(reference, ref_id) if resolver is not None else None
    if name is None:
        logger.debug("Unresolved %s reference %r", reference.value, ref_id)
        return UNKNOWN
    return name


def format_type_change(
    change: RawChange,
    label: str,
    reference: ReferenceKind,
    resolver: Optional[ReferenceResolver] = None,
) -> FormattedChange:
    """Render a typed lookup reference by its display name."""
    by_name = not change.path.is_root and change.path.leaf in _NAME_LEAVES
    return _row(
        change,
        label,
        _display_name(change.lhs, reference, resolver, by_name),
        _display_name(change.rhs, reference, resolver, by_name),
    )


def format_gender_change(
    change: RawChange,
    resolver: Optional[ReferenceResolver] = None,
) -> FormattedChange:
    """Render a change to the gender reference."""
    return format_type_change(change, "Gender", ReferenceKind.GENDER, resolver)


def format_area_change(
    change: RawChange,
    label: str = "Area",
    resolver: Optional[ReferenceResolver] = None,
) -> FormattedChange:
    """
    Render an area reference by name.

    Accepts changes on the area field itself (bare reference or
    {"id", "name"} object) and on its ".name" sub-path.
    """
    return format_type_change(change, label, ReferenceKind.AREA, resolver)
