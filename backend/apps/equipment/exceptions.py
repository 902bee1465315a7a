"""
Exceptions for equipment app.
"""


class DuplicateTagNumberError(Exception):
    """Another equipment record already uses the tag number."""

    pass
