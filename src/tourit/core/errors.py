"""Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``tourit.main`` maps each class to its HTTP
status code so that handlers never build error responses by hand.
"""

from __future__ import annotations


class TouritError(RuntimeError):
    """Base exception for failures surfaced to API clients.

    Unclassified failures render as 500 with the message as detail.
    """

    status_code: int = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TouritError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request."


class AuthError(TouritError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Could not validate credentials"


class AuthzError(TouritError):
    """Authenticated caller is not allowed to touch the resource."""

    status_code = 403
    default_message = "You do not have permission to perform this action."


class NotFoundError(TouritError):
    """Referenced entity does not exist."""

    status_code = 404
    default_message = "Not found."


class ConflictError(TouritError):
    """A uniqueness rule would be violated."""

    status_code = 400
    default_message = "Resource already exists."
