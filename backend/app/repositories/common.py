"""Query helpers shared by the repositories."""

from sqlalchemy import or_


def search_filter(search, *columns):
    """Case-insensitive substring match of ``search`` on any of ``columns``."""
    pattern = "%{}%".format(search.strip())
    return or_(*(column.ilike(pattern) for column in columns))
