"""
Per-entity data access.

Each module exposes plain functions taking the request's Session: lookups by
id (raising NotFound), filtered/paginated listings, and create/update/delete
that only flush. Committing is left to the caller's transaction scope.
"""
