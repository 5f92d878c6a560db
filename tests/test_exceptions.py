"""
Tests for domain exceptions.

Simple tests to ensure exceptions work correctly.
"""

from optica_pos.domain.exceptions import (
    NotFoundError,
    OpticaError,
    StoreError,
    ValidationError,
)


class TestExceptions:
    """Test custom exceptions."""

    def test_base_exception(self):
        """Test OpticaError keeps message and details."""
        exc = OpticaError("Test error")
        assert exc.message == "Test error"
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_validation_error(self):
        """Test ValidationError."""
        exc = ValidationError("name", "  ", "Name cannot be empty")
        assert "name" in str(exc)
        assert "Name cannot be empty" in str(exc)
        assert exc.field == "name"
        assert exc.details["value"] == "  "

    def test_validation_error_without_value(self):
        """Test ValidationError keeps None values as None."""
        exc = ValidationError("amount", None, "Amount is required")
        assert exc.details["value"] is None

    def test_not_found_error(self):
        """Test NotFoundError."""
        exc = NotFoundError("Client", "abc")
        assert "Client" in str(exc)
        assert "abc" in str(exc)
        assert exc.record_id == "abc"

    def test_store_error(self):
        """Test StoreError."""
        exc = StoreError("insert", "connection refused")
        assert "insert" in str(exc)
        assert "connection refused" in str(exc)
        assert exc.code is None
        assert not exc.is_constraint_violation

    def test_store_error_constraint_violation(self):
        """Test StoreError flags SQLSTATE class 23 codes."""
        exc = StoreError("insert", "violates foreign key constraint", code="23503")
        assert exc.is_constraint_violation
        assert exc.details["code"] == "23503"

    def test_hierarchy(self):
        """All ledger errors share one base class."""
        for exc in (
            ValidationError("f", 1, "r"),
            NotFoundError("Client", 1),
            StoreError("select"),
        ):
            assert isinstance(exc, OpticaError)
