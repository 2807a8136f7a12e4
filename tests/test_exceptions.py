"""Tests for the exception hierarchy and message formatting."""

import pytest

from crossquery.exceptions import (
    ConfigurationError,
    CrossQueryError,
    InvalidCriterionError,
    InvalidStageError,
    UnknownRelationshipError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_class,parent",
        [
            (ConfigurationError, CrossQueryError),
            (UnknownRelationshipError, ConfigurationError),
            (ValidationError, CrossQueryError),
            (InvalidCriterionError, ValidationError),
            (InvalidStageError, ValidationError),
        ],
    )
    def test_subclassing(self, exc_class, parent):
        assert issubclass(exc_class, parent)

    def test_base_is_exception(self):
        assert issubclass(CrossQueryError, Exception)

    def test_catch_by_base(self):
        with pytest.raises(CrossQueryError):
            raise InvalidStageError("Stage not allowed", stage="$group")


class TestFormatting:
    def test_message_only(self):
        exc = CrossQueryError("Something failed")
        assert str(exc) == "Something failed"
        assert exc.details == {}

    def test_message_with_details(self):
        exc = UnknownRelationshipError("Relationship not found", relationship="profile", path="profile")
        assert str(exc) == "Relationship not found (relationship='profile', path='profile')"
        assert exc.details["relationship"] == "profile"

    def test_details_only(self):
        exc = InvalidCriterionError(field="age")
        assert str(exc) == "field='age'"

    def test_repr(self):
        exc = InvalidCriterionError("BETWEEN needs two values", values=["1"])
        assert repr(exc) == "InvalidCriterionError(message='BETWEEN needs two values', details={'values': ['1']})"
