"""
Blog API — Request/Response Schemas
====================================

What:  Pydantic models and typed mappings defining the API contract.
Why:   Request bodies are loosely typed on purpose: the store's schema is the
       only guard on create, and PATCH bodies go through extract_blog_edits(),
       which drops anything that is not a recognized string field.
How:   FastAPI parses bodies into these models and serializes BlogResponse
       with the public field names (_id, createdAt, updatedAt).
"""

import uuid
from datetime import datetime
from typing import Any, Mapping, Tuple, TypedDict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Fields a client may change after creation
EDITABLE_FIELDS: Tuple[str, ...] = ("title", "content", "author")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BlogCreate(BaseModel):
    """
    Body of POST /api/blogs.

    Values are not type-checked here. The store casts numbers and booleans
    to strings and rejects objects and arrays with a 400. Whether `author`
    was sent at all is read from `model_fields_set`, so an explicit null is
    not defaulted.
    """

    title: Any = None
    content: Any = None
    author: Any = None

    model_config = ConfigDict(extra="ignore")

    @property
    def author_supplied(self) -> bool:
        return "author" in self.model_fields_set


class BlogEdits(TypedDict, total=False):
    """Whitelisted edit set applied by PATCH /api/blogs/{id}."""

    title: str
    content: str
    author: str


def extract_blog_edits(data: Any) -> BlogEdits:
    """
    Reduce an arbitrary request body to the editable string fields.

    A key is kept iff it is one of EDITABLE_FIELDS and its value is a str.
    Wrong-typed values are dropped, not coerced; unknown keys are ignored.
    Never raises: a non-mapping body gives an empty edit set.
    """
    edits: BlogEdits = {}
    if not isinstance(data, Mapping):
        return edits
    for field in EDITABLE_FIELDS:
        if field in data and isinstance(data[field], str):
            edits[field] = data[field]
    return edits


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BlogResponse(BaseModel):
    """
    Full representation of a stored blog post.

    Serialized as:
        {"_id", "title", "content", "author", "publication_date",
         "createdAt", "updatedAt"}

    Validation accepts both the ORM attribute names and the public names,
    since FastAPI re-validates the dumped model against response_model.
    """

    id: uuid.UUID = Field(
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
        description="Store-assigned identifier",
    )
    title: str
    content: str
    author: str
    publication_date: str = Field(description="Creation date, e.g. 10/19/2026")
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Every error body: a single human-readable message."""

    message: str = Field(description="Human-readable error description")

