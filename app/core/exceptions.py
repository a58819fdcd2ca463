"""
Error taxonomy for the Clinick API.

Every error raised by a component maps to exactly one HTTP status in
app.main. DeliveryError never reaches a client: push and mail failures are
logged by the component that hit them.
"""


class ClinickError(Exception):
    """Base class for errors surfaced through the JSON error envelope."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)


class ValidationError(ClinickError):
    """A required field or query parameter is missing or unusable."""

    status_code = 400


class NotFoundError(ClinickError):
    """The addressed record does not exist."""

    status_code = 404


class StorageError(ClinickError):
    """Firestore is unreachable or rejected the operation."""

    status_code = 500


class DeliveryError(ClinickError):
    """A push or mail channel failed. Logged only, never sent to a client."""

