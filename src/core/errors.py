"""
Error taxonomy for the admin console core.
"""


class AdminError(Exception):
    """Base class for admin console errors."""


class ValidationFailure(AdminError):
    """A required create-form field is missing or invalid.

    Only the first unmet requirement is reported; the form stays open so the
    user can correct it.
    """

    def __init__(self, field: str, message: str = "Please fill in all required fields", label: str = None):
        self.field = field
        self.label = label or field
        self.message = message
        super().__init__(f"{message} ({self.label})")


class NotFound(AdminError, LookupError):
    """An index or id no longer refers to a record in the store."""

    def __init__(self, reference):
        self.reference = reference
        super().__init__(f"No record at {reference!r}")
