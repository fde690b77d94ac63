"""Tests for generic field formatters."""

import pytest
from src.revision_diff import ChangeKind, RawChange, ReferenceKind
from src.revision_diff.formatters import (
    UNKNOWN,
    format_area_change,
    format_ended_change,
    format_gender_change,
    format_scalar_change,
    format_type_change,
    humanize,
)


class TestHumanize:
    """Tests for field name humanization."""

    @pytest.mark.parametrize("name,expected", [
        ("width", "Width"),
        ("pages", "Pages"),
        ("editionGroupBbid", "Edition Group Bbid"),
        ("page_count", "Page Count"),
    ])
    def test_humanize(self, name, expected):
        assert humanize(name) == expected


class TestScalarChange:
    """Tests for scalar pass-through rendering."""

    def test_modified_values_unchanged(self):
        """Old and new values pass through as they are."""
        change = RawChange(path=["pages"], kind="modified", lhs=200, rhs=210)
        result = format_scalar_change(change, "Page Count")

        assert result.label == "Page Count"
        assert result.kind == ChangeKind.MODIFIED
        assert result.rendered_old == 200
        assert result.rendered_new == 210

    def test_added_has_no_old_value(self):
        change = RawChange(path=["beginDate"], kind="added", rhs="1950-05-05")
        result = format_scalar_change(change, "Begin Date")

        assert result.rendered_old is None
        assert result.rendered_new == "1950-05-05"

    def test_removed_has_no_new_value(self):
        change = RawChange(path=["weight"], kind="removed", lhs=350)
        result = format_scalar_change(change, "Weight")

        assert result.rendered_old == 350
        assert result.rendered_new is None

    def test_no_type_validation(self):
        """Any value type is accepted."""
        change = RawChange(path=["depth"], kind="modified", lhs="thin", rhs=[1, 2])
        result = format_scalar_change(change, "Depth")

        assert result.rendered_old == "thin"
        assert result.rendered_new == [1, 2]


class TestEndedChange:
    """Tests for the ended flag."""

    def test_renders_yes_no(self):
        change = RawChange(path=["ended"], kind="modified", lhs=False, rhs=True)
        result = format_ended_change(change)

        assert result.label == "Ended"
        assert result.rendered_old == "No"
        assert result.rendered_new == "Yes"

    def test_added_flag(self):
        change = RawChange(path=["ended"], kind="added", rhs=False)
        result = format_ended_change(change)

        assert result.rendered_old is None
        assert result.rendered_new == "No"


class TestTypeChange:
    """Tests for typed reference rendering."""

    def test_resolves_ids(self, resolver):
        """Ids render as the lookup's display name."""
        change = RawChange(path=["type"], kind="modified", lhs=1, rhs=2)
        result = format_type_change(change, "Work Type", ReferenceKind.WORK_TYPE, resolver)

        assert result.label == "Work Type"
        assert result.rendered_old == "Novel"
        assert result.rendered_new == "Short Story"

    def test_resolves_id_objects(self, resolver):
        change = RawChange(path=["type"], kind="modified", lhs={"id": 1}, rhs={"id": 2})
        result = format_type_change(change, "Author Type", ReferenceKind.AUTHOR_TYPE, resolver)

        assert result.rendered_old == "Person"
        assert result.rendered_new == "Group"

    def test_uses_embedded_label(self):
        """An object carrying its label needs no resolver."""
        change = RawChange(
            path=["type"],
            kind="modified",
            lhs={"id": 1, "label": "Novel"},
            rhs={"id": 3, "label": "Poem"},
        )
        result = format_type_change(change, "Work Type", ReferenceKind.WORK_TYPE)

        assert result.rendered_old == "Novel"
        assert result.rendered_new == "Poem"

    def test_label_sub_path(self):
        """A change on the .label sub-path already carries the name."""
        change = RawChange(path=["type", "label"], kind="modified", lhs="Novel", rhs="Poem")
        result = format_type_change(change, "Work Type", ReferenceKind.WORK_TYPE)

        assert result.rendered_old == "Novel"
        assert result.rendered_new == "Poem"

    def test_unresolved_reference_is_unknown(self, resolver):
        """Unknown ids render a placeholder instead of failing."""
        change = RawChange(path=["type"], kind="modified", lhs=1, rhs=99)
        result = format_type_change(change, "Work Type", ReferenceKind.WORK_TYPE, resolver)

        assert result.rendered_old == "Novel"
        assert result.rendered_new == UNKNOWN

    def test_no_resolver_is_unknown(self):
        change = RawChange(path=["type"], kind="added", rhs=1)
        result = format_type_change(change, "Work Type", ReferenceKind.WORK_TYPE)

        assert result.rendered_old is None
        assert result.rendered_new == UNKNOWN


class TestGenderChange:
    """Tests for gender rendering."""

    def test_gender(self, resolver):
        change = RawChange(path=["gender"], kind="modified", lhs=1, rhs=2)
        result = format_gender_change(change, resolver)

        assert result.label == "Gender"
        assert result.rendered_old == "Male"
        assert result.rendered_new == "Female"


class TestAreaChange:
    """Tests for area reference rendering."""

    def test_default_label(self, resolver):
        change = RawChange(path=["area"], kind="modified", lhs=10, rhs=20)
        result = format_area_change(change, resolver=resolver)

        assert result.label == "Area"
        assert result.rendered_old == "London"
        assert result.rendered_new == "Paris"

    def test_area_object(self):
        change = RawChange(
            path=["beginArea"],
            kind="modified",
            lhs={"id": 10, "name": "London"},
            rhs={"id": 20, "name": "Paris"},
        )
        result = format_area_change(change, "Begin Area")

        assert result.label == "Begin Area"
        assert result.rendered_old == "London"
        assert result.rendered_new == "Paris"

    def test_name_sub_path(self):
        change = RawChange(path=["beginArea", "name"], kind="modified", lhs="London", rhs="Paris")
        result = format_area_change(change, "Begin Area")

        assert result.rendered_old == "London"
        assert result.rendered_new == "Paris"
