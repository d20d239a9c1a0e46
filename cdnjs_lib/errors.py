"""Exceptions raised by the cdnjs library."""


class CdnjsError(Exception):
    """Base class for all lookup failures."""


class FetchError(CdnjsError):
    """The catalog endpoint could not be reached."""


class NotFoundError(CdnjsError):
    """No package matched the requested term."""
