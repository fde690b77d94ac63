"""Tests for raw change computation."""

from src.revision_diff import ChangeKind, ChangePath, RawChange, compute_changes


def summary(changes):
    return [(str(c.path), c.kind.value, c.lhs, c.rhs) for c in changes]


class TestChangePath:
    """Tests for change path construction."""

    def test_from_list(self):
        path = ChangePath.model_validate(["beginArea", "name"])
        assert path.root == "beginArea"
        assert path.leaf == "name"
        assert path.is_root is False

    def test_from_dotted_string(self):
        path = ChangePath.model_validate("beginArea.name")
        assert path.segments == ("beginArea", "name")
        assert str(path) == "beginArea.name"

    def test_raw_change_coerces_path(self):
        change = RawChange(path=["endDate"], kind="modified")
        assert change.path.root == "endDate"
        assert change.path.is_root is True


class TestComputeChanges:
    """Tests for snapshot diffing."""

    def test_no_changes(self):
        data = {"pages": 200, "languageSet": {"languages": ["en"]}}
        assert compute_changes(data, dict(data)) == []

    def test_scalar_changes(self):
        old = {"beginDate": "1950", "endDate": "2001-01-01", "ended": True}
        new = {"beginDate": "1950", "endDate": "2002-02-02", "gender": 2}

        assert summary(compute_changes(old, new)) == [
            ("endDate", "modified", "2001-01-01", "2002-02-02"),
            ("ended", "removed", True, None),
            ("gender", "added", None, 2),
        ]

    def test_no_parent(self):
        """Without a parent every present field is added."""
        changes = compute_changes(None, {"pages": 200, "width": None})

        assert summary(changes) == [("pages", "added", None, 200)]

    def test_none_to_value(self):
        changes = compute_changes({"pages": None}, {"pages": 12})
        assert changes[0].kind == ChangeKind.ADDED

    def test_nested_dict_produces_sub_paths(self):
        old = {"annotation": {"content": "old", "lastRevisionId": 3}}
        new = {"annotation": {"content": "new", "lastRevisionId": 3}}

        assert summary(compute_changes(old, new)) == [
            ("annotation.content", "modified", "old", "new"),
        ]

    def test_reference_compared_whole(self):
        """Areas and other references yield one change at their own path."""
        old = {"beginArea": {"id": 10, "name": "London"}}
        new = {"beginArea": {"id": 20, "name": "Paris"}}

        changes = compute_changes(old, new)

        assert len(changes) == 1
        assert str(changes[0].path) == "beginArea"
        assert changes[0].rhs == {"id": 20, "name": "Paris"}

    def test_list_compared_whole(self):
        old = {"languageSet": {"languages": ["en", "fr"]}}
        new = {"languageSet": {"languages": ["fr", "de"]}}

        assert summary(compute_changes(old, new)) == [
            ("languageSet.languages", "modified", ["en", "fr"], ["fr", "de"]),
        ]
