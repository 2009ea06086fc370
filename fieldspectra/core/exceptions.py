"""
FieldSpectra Exceptions

Exception hierarchy for error handling.
"""


class FieldSpectraError(Exception):
    """Base exception for FieldSpectra"""

    pass


class UnknownFieldError(FieldSpectraError, KeyError):
    """Requested field id is not in the field catalog"""

    def __init__(self, field_id: str):
        super().__init__(f"Field {field_id} not found")
        self.field_id = field_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ValidationError(FieldSpectraError):
    """Data validation failed"""

    pass


class ExportError(FieldSpectraError):
    """Raster export failed"""

    pass
