"""Errors shared by the metadata lookups."""


class ItemNotFoundError(LookupError):
    """The API answered successfully but did not return the requested item."""
