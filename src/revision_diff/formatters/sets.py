"""
Formatters for set-valued relationship fields.

Languages, publishers, release events, aliases and identifiers are sets of
members. Two sets are compared by member identity, never by position, so
reordering a set produces no additions or removals.
"""

from typing import Any, Callable, Hashable, Iterable, Optional

from ..models import RawChange, SetChange


def _first(member: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if member.get(key) is not None:
            return member[key]
    return None


def _nested_id(member: dict[str, Any], key: str) -> Any:
    """Id of a nested reference stored either as {"key": {...}} or "keyId"."""
    nested = member.get(key)
    if isinstance(nested, dict):
        return nested.get("id")
    return member.get(f"{key}Id", nested)


class SetFormatter:
    """
    Detects and renders changes to one set-valued field.

    Args:
        field: Root path segment of the set (e.g. "languageSet")
        member_key: Key holding the member list inside the set object
        label: Display label of the field
        identity: Returns the hashable identity of a member
        display: Returns the displayable form of a member
    """

    def __init__(
        self,
        field: str,
        member_key: str,
        label: str,
        identity: Callable[[Any], Hashable],
        display: Callable[[Any], Any],
    ):
        self.field = field
        self.member_key = member_key
        self.label = label
        self._identity = identity
        self._display = display

    def __repr__(self) -> str:
        return f"SetFormatter({self.field!r})"

    def changed(self, change: RawChange) -> bool:
        """
        Whether the change is a change of this set's membership.

        Matches the set itself, its member list and one position of that
        list. Bookkeeping keys of the set object (its own id) and edits
        below a single member are not membership changes.
        """
        segments = change.path.segments
        if segments[0] != self.field:
            return False
        if len(segments) == 1:
            return True
        return segments[1] == self.member_key and len(segments) <= 3

    def members(self, value: Any) -> list[Any]:
        """
        Normalise one side of a change to a member list.

        None is the empty set. A set object yields its member list. A dict
        that is not a set object is a single member, as produced by a change
        on one item of the set.
        """
        if value is None:
            return []
        if isinstance(value, dict):
            if self.member_key in value:
                return list(value[self.member_key] or [])
            return [value]
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def _only_in(self, members: Iterable[Any], other: Iterable[Any]) -> list[Any]:
        excluded = {self._identity(member) for member in other}
        seen: set[Hashable] = set()
        result = []
        for member in members:
            key = self._identity(member)
            if key in excluded or key in seen:
                continue
            seen.add(key)
            result.append(self._display(member))
        return result

    def format(self, change: RawChange) -> Optional[SetChange]:
        """
        Render the members added to and removed from the set.

        Returns None when membership is unchanged, e.g. a reordering.
        """
        old = self.members(change.lhs)
        new = self.members(change.rhs)
        additions = self._only_in(new, old)
        removals = self._only_in(old, new)
        if not additions and not removals:
            return None
        return SetChange(
            label=self.label,
            kind=change.kind,
            additions=additions,
            removals=removals,
        )


# --- Member identity and display ---

def _language_identity(member: Any) -> Hashable:
    if isinstance(member, dict):
        return _first(member, "id", "isoCode3", "isoCode1", "name")
    return member


def _language_display(member: Any) -> Any:
    if isinstance(member, dict):
        return _first(member, "name", "isoCode3", "id")
    return member


def _publisher_identity(member: Any) -> Hashable:
    if isinstance(member, dict):
        return _first(member, "bbid", "id")
    return member


def _publisher_display(member: Any) -> Any:
    if isinstance(member, dict):
        alias = member.get("defaultAlias")
        if isinstance(alias, dict) and alias.get("name"):
            return alias["name"]
        return _first(member, "name", "bbid", "id")
    return member


def _release_event_identity(member: Any) -> Hashable:
    if isinstance(member, dict):
        return (member.get("date"), _nested_id(member, "area"))
    return member


def _release_event_display(member: Any) -> Any:
    if isinstance(member, dict):
        return member.get("date")
    return member


def _alias_identity(member: Any) -> Hashable:
    if isinstance(member, dict):
        return (member.get("name"), member.get("sortName"), _nested_id(member, "language"))
    return member


def _alias_display(member: Any) -> Any:
    if isinstance(member, dict):
        return member.get("name")
    return member


def _identifier_identity(member: Any) -> Hashable:
    if isinstance(member, dict):
        return (_nested_id(member, "type"), member.get("value"))
    return member


def _identifier_display(member: Any) -> Any:
    if isinstance(member, dict):
        return member.get("value")
    return member


language_set = SetFormatter(
    "languageSet", "languages", "Languages",
    _language_identity, _language_display,
)
publisher_set = SetFormatter(
    "publisherSet", "publishers", "Publishers",
    _publisher_identity, _publisher_display,
)
release_event_set = SetFormatter(
    "releaseEventSet", "releaseEvents", "Release Events",
    _release_event_identity, _release_event_display,
)
alias_set = SetFormatter(
    "aliasSet", "aliases", "Aliases",
    _alias_identity, _alias_display,
)
identifier_set = SetFormatter(
    "identifierSet", "identifiers", "Identifiers",
    _identifier_identity, _identifier_display,
)
