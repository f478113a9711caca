"""Domain errors raised by services and translated to HTTP responses by the app."""


class PagewiseError(Exception):
    status_code = 500
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(PagewiseError):
    """Input rejected before any persistence call."""

    status_code = 400


class OwnershipError(PagewiseError):
    status_code = 403


class NotFoundError(PagewiseError):
    status_code = 404


class ConflictError(PagewiseError):
    """The plan was modified by another request in the meantime."""

    status_code = 409


class DependencyError(PagewiseError):
    """A collaborator returned nothing usable (empty chapter index, failed write)."""

    status_code = 500


class StalePlanError(ConflictError):
    """Optimistic version check failed; repeating the request may succeed."""

    retryable = True
