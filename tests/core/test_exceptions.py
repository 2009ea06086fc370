"""
Tests for the exception hierarchy
"""

import pytest

from fieldspectra.core.exceptions import (
    ExportError,
    FieldSpectraError,
    UnknownFieldError,
    ValidationError,
)


class TestExceptions:
    def test_hierarchy(self):
        for exc in (UnknownFieldError, ValidationError, ExportError):
            assert issubclass(exc, FieldSpectraError)

    def test_unknown_field_message(self):
        err = UnknownFieldError("field-9")

        assert str(err) == "Field field-9 not found"
        assert err.field_id == "field-9"

    def test_unknown_field_caught_as_key_error(self):
        with pytest.raises(KeyError):
            raise UnknownFieldError("field-9")
