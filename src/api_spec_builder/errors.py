"""Exceptions raised by the spec builder."""


class SpecBuilderError(Exception):
    """Base class for all errors surfaced to callers."""


class InvalidTypeReference(SpecBuilderError):
    """A type handle could not be resolved into a document identifier."""

    def __init__(self, message: str, handle=None):
        super().__init__(message)
        self.handle = handle


class RouteLoadError(SpecBuilderError):
    """A route manifest could not be read or validated."""
