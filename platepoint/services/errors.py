"""Service-layer errors. Routers translate these into HTTP status codes."""


class ServiceError(Exception):
    """Base class for expected, user-facing failures."""


class NotFoundError(ServiceError):
    """The referenced row does not exist (or is inactive)."""


class ConflictError(ServiceError):
    """A uniqueness rule would be violated (e-mail, one rating per user)."""
