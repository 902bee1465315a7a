"""
Exceptions for taxonomies app.
"""


class UnknownCategoryError(Exception):
    """Dropdown category is not one of CATEGORIES."""

    pass
