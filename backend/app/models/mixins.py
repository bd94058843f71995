"""
Shared column definitions for every table: opaque UUID primary key plus
creation/update timestamps.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, String


def utcnow():
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid.uuid4())


class IdentifiedMixin:
    """Adds the id, created_at and updated_at columns."""

    id = Column(String(36), primary_key=True, default=new_id,
                doc="Globally unique opaque identifier")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow,
                        doc="Timestamp when the row was created")
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
                        doc="Timestamp of the last update to the row")
