"""Errors raised by services for missing preconditions."""


class NotFoundError(LookupError):
    """A required record does not exist."""


class InvalidRequestError(ValueError):
    """The request cannot be served with the current data."""
