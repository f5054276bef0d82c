"""Unit tests for ValidatedField change tracking."""

from __future__ import annotations

from pathlib import Path

from farm_config.validated_field import IconRef, ValidatedField


class TestConstruction:
    """Tests for the valid/invalid constructors."""

    def test_valid_sets_both_change_flags(self):
        """A freshly built valid field reports value and validity as changed."""
        field = ValidatedField.valid(Path("/media/farm"))

        assert field.value == Path("/media/farm")
        assert field.is_valid is True
        assert field.value_changed is True
        assert field.validity_changed is True

    def test_invalid_sets_both_change_flags(self):
        """A freshly built invalid field reports value and validity as changed."""
        field = ValidatedField.invalid("abc")

        assert field.value == "abc"
        assert field.is_valid is False
        assert field.value_changed is True
        assert field.validity_changed is True


class TestChangeFlags:
    """Tests for reset and mutation of change flags."""

    def test_reset_without_mutation_clears_flags(self):
        """Both flags stay cleared when nothing is mutated after a reset."""
        field = ValidatedField.valid("2 GB")
        field.reset_change_flags()

        assert field.value_changed is False
        assert field.validity_changed is False

    def test_replace_value_with_same_value_marks_changed(self):
        """Replacing a value with an equal one still marks it changed."""
        field = ValidatedField.valid("2 GB")
        field.reset_change_flags()

        field.replace_value("2 GB")

        assert field.value_changed is True
        assert field.validity_changed is False
        assert field.value == "2 GB"

    def test_set_validity_with_same_result_marks_changed(self):
        """Setting the same validity again still marks validity changed."""
        field = ValidatedField.invalid("1 GB")
        field.reset_change_flags()

        field.set_validity(False)

        assert field.validity_changed is True
        assert field.value_changed is False
        assert field.is_valid is False

    def test_set_validity_flips_flag(self):
        """Validity follows the latest set_validity call."""
        field = ValidatedField.invalid("1 GB")
        field.set_validity(True)

        assert field.is_valid is True

    def test_flags_are_independent(self):
        """Mutating the value does not touch the validity flag and vice versa."""
        field = ValidatedField.valid("2 GB")
        field.reset_change_flags()
        field.set_validity(False)
        field.reset_change_flags()
        field.replace_value("1 GB")

        assert field.value_changed is True
        assert field.validity_changed is False


class TestStatusIcon:
    """Tests for status_icon."""

    def test_valid_field_icon(self):
        assert ValidatedField.valid("2 GB").status_icon() is IconRef.CHECKMARK

    def test_invalid_field_icon(self):
        assert ValidatedField.invalid("abc").status_icon() is IconRef.WARNING

    def test_icon_does_not_touch_flags(self):
        """Reading the icon is not a mutation."""
        field = ValidatedField.valid("2 GB")
        field.reset_change_flags()
        field.status_icon()

        assert field.value_changed is False
        assert field.validity_changed is False

    def test_repr(self):
        repr_str = repr(ValidatedField.invalid("abc"))
        assert "'abc'" in repr_str
        assert "is_valid=False" in repr_str
