"""
Blog API — BlogPost SQLAlchemy Model
=====================================

What:  ORM model representing the `blogs` table.
Why:   The model is the schema the store enforces: every content field is a
       required, non-empty string.
How:   @validates hooks run on every attribute assignment (construction and
       updates). Numbers and booleans are cast to strings; anything else that
       is not a non-empty string raises ValidationError before anything
       reaches the database.

Table Design:
    - UUID primary key, generated in Python so it works on every backend
    - title/content/author/publication_date: required strings
    - created_at/updated_at: maintained by the ORM, UTC
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from blog_api.database import Base
from blog_api.exceptions import ValidationError

REQUIRED_STRING_FIELDS = ("title", "content", "author", "publication_date")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_required_string(field: str, value: Any) -> str:
    """
    Enforce the schema rule for one field and return the stored string.

    Numbers and booleans are cast to their string form (True -> "true",
    5 -> "5", 2.5 -> "2.5"). Objects and arrays cannot be cast.

    Raises:
        ValidationError: value is missing, empty, or cannot be cast to a string.
    """
    if value is None or value == "":
        raise ValidationError(
            message=f"Blog validation failed: {field}: Path `{field}` is required.",
            field=field,
        )
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value)) if value.is_integer() else repr(value)
    raise ValidationError(
        message=(
            f"Blog validation failed: {field}: Cast to string failed for value "
            f"\"{value}\" (type {type(value).__name__}) at path \"{field}\""
        ),
        field=field,
    )


class BlogPost(Base):
    """
    A single blog post.

    Lifecycle:
        1. Created with author defaulted and publication_date stamped
        2. title/content/author may be edited; publication_date and id never change
        3. Hard-deleted; no soft-delete or versioning
    """

    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)

    # Stored as the display string produced at creation (e.g. "10/19/2026")
    publication_date: Mapped[str] = mapped_column(String(32), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_blogs_created_at", created_at),
    )

    @validates(*REQUIRED_STRING_FIELDS)
    def _validate_string_field(self, key: str, value: Any) -> str:
        return validate_required_string(key, value)

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, title='{self.title}', author='{self.author}')>"
