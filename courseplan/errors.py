"""Exceptions raised outside the conflict engine."""


class CatalogError(Exception):
    """The catalog payload could not be turned into a course mapping."""
