"""
services.errors - Exceptions raised by the service layer.
"""


class ValidationError(ValueError):
    """Submitted data is missing required fields or has bad values."""
    pass


class DuplicateError(Exception):
    """A member with the same national ID is already stored."""

    def __init__(self, national_id: str):
        super().__init__(f"a member with national ID {national_id} already exists")
        self.national_id = national_id
