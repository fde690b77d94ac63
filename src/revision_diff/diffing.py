"""
Raw change computation between two entity snapshots.

Default diff primitive for revision stores that keep whole snapshots.
"""

from typing import Any, Optional

from .models import ChangeKind, RawChange

# Keys that mark a dict as a reference to another record
REFERENCE_KEYS = ("id", "bbid")


def _is_reference(value: Any) -> bool:
    return isinstance(value, dict) and any(key in value for key in REFERENCE_KEYS)


def compute_changes(
    old: Optional[dict[str, Any]],
    new: Optional[dict[str, Any]],
    path: tuple[str, ...] = ()
) -> list[RawChange]:
    """
    Compute the field-level differences between two snapshots.

    Plain nested dicts are recursed into, producing sub-paths. Lists and
    reference objects (dicts carrying "id" or "bbid") are compared whole at
    their own path, so a set field or an area yields a single change.

    Args:
        old: Parent snapshot (None when the entity has no parent revision)
        new: Snapshot at this revision
        path: Current path prefix (used for recursion)

    Returns:
        Raw changes in sorted key order

    Example:
        >>> changes = compute_changes({"pages": 200}, {"pages": 210, "width": 12})
        >>> [(str(c.path), c.kind.value) for c in changes]
        [('pages', 'modified'), ('width', 'added')]
    """
    old = old or {}
    new = new or {}
    changes: list[RawChange] = []

    for key in sorted(set(old) | set(new), key=str):
        key_path = path + (key,)

        if key not in old:
            if new[key] is not None:
                changes.append(RawChange(path=key_path, kind=ChangeKind.ADDED, rhs=new[key]))
            continue

        if key not in new:
            if old[key] is not None:
                changes.append(RawChange(path=key_path, kind=ChangeKind.REMOVED, lhs=old[key]))
            continue

        lhs, rhs = old[key], new[key]
        if lhs == rhs:
            continue

        if lhs is None:
            changes.append(RawChange(path=key_path, kind=ChangeKind.ADDED, rhs=rhs))
        elif rhs is None:
            changes.append(RawChange(path=key_path, kind=ChangeKind.REMOVED, lhs=lhs))
        elif (
            isinstance(lhs, dict) and isinstance(rhs, dict)
            and not _is_reference(lhs) and not _is_reference(rhs)
        ):
            changes.extend(compute_changes(lhs, rhs, key_path))
        else:
            changes.append(RawChange(path=key_path, kind=ChangeKind.MODIFIED, lhs=lhs, rhs=rhs))

    return changes
