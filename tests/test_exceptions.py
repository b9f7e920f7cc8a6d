"""
Tests for reliability exceptions.
"""
import pytest

from item_reliability import (
    InsufficientColumnsError,
    InvalidInputKindError,
    ReliabilityError,
)


class TestReliabilityError:
    """Tests for message formatting."""

    def test_message_only(self):
        error = ReliabilityError("Something failed")
        assert str(error) == "Something failed"
        assert error.context == {}

    def test_context_and_cause(self):
        cause = ValueError("could not convert 'x'")
        error = InvalidInputKindError(
            "Item scores must be numeric", context={"columns": ["q1"]}, original_error=cause
        )

        assert str(error) == (
            "Item scores must be numeric (context: columns=['q1']) "
            "- caused by: could not convert 'x'"
        )
        assert error.original_error is cause

    def test_insufficient_columns_carries_counts(self):
        error = InsufficientColumnsError(
            "Need more items", required=3, actual=2, context={"operation": "reliability"}
        )

        assert error.required == 3
        assert error.actual == 2
        assert error.context == {"required": 3, "actual": 2, "operation": "reliability"}
        assert "required=3" in str(error)

    @pytest.mark.parametrize("error_class", [InvalidInputKindError, InsufficientColumnsError])
    def test_subclasses_share_base(self, error_class):
        assert issubclass(error_class, ReliabilityError)
