"""
Application error taxonomy.

Every failure that can reach an API caller is a BullSharkError subclass.
Each class carries the HTTP status and a short machine-readable kind,
so routes can simply let errors propagate and the exception handler in
app.main renders them.

Usage:
    from app.shared.errors import ExternalAPIError

    raise ExternalAPIError("Strava token refresh failed (500): ...")
"""


class BullSharkError(Exception):
    """Base application error."""

    status_code: int = 500
    kind: str = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Error body returned to API callers."""
        return {"error": self.message, "kind": self.kind}


class NoCredentialError(BullSharkError):
    """
    No stored Strava credential for an identity.

    Terminal: an operator must seed the initial token
    (see scripts/seed_token.py).
    """

    status_code = 500
    kind = "no_credential"


class ExternalAPIError(BullSharkError):
    """Strava is unreachable or rejected the request."""

    status_code = 502
    kind = "external_api"


class ConversionError(BullSharkError):
    """An upstream record lacks the fields needed to identify it."""

    status_code = 422
    kind = "conversion"


class InternalConversionError(BullSharkError):
    """A date/time computation was ill-defined (e.g. DST gap or overlap)."""

    status_code = 500
    kind = "internal_conversion"


class UnauthorizedError(BullSharkError):
    """Caller failed the shared-secret check."""

    status_code = 401
    kind = "unauthorized"


class DatabaseError(BullSharkError):
    """Storage unavailable or query rejected."""

    status_code = 500
    kind = "database"


class BadRequestError(BullSharkError):
    """Malformed request parameters."""

    status_code = 400
    kind = "bad_request"
