"""
Blog API — Blog Repository (Persistence Collaborator)
======================================================

What:  The five store primitives the handlers need.
How:   Each method performs exactly one logical store operation on the
       request's AsyncSession. Writes are flushed and committed before the
       method returns, so constraint, driver and commit errors all surface
       inside the calling service, before any response is built.

Absence is signalled with None, never with an exception. Schema violations
raise ValidationError from the model's validators.
"""

import uuid
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models.blog import BlogPost


class BlogRepository:
    """Store access for BlogPost records, bound to one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[BlogPost]:
        """Every record, oldest first."""
        result = await self.session.execute(
            select(BlogPost).order_by(BlogPost.created_at, BlogPost.id)
        )
        return list(result.scalars().all())

    async def find_by_id(self, blog_id: uuid.UUID) -> Optional[BlogPost]:
        return await self.session.get(BlogPost, blog_id)

    async def insert(
        self,
        title: Any,
        content: Any,
        author: Any,
        publication_date: Any,
    ) -> BlogPost:
        """
        Create a record and commit it.

        All four fields are passed to the constructor, even when None, so
        every field goes through the model's validators.

        Raises:
            ValidationError: a field is missing, empty, or cannot be cast to a string
        """
        blog = BlogPost(
            title=title,
            content=content,
            author=author,
            publication_date=publication_date,
        )
        self.session.add(blog)
        # Flush first: constraint errors surface before the commit is attempted
        await self.session.flush()
        await self.session.commit()
        return blog

    async def update_by_id(
        self, blog_id: uuid.UUID, edits: Mapping[str, Any]
    ) -> Optional[BlogPost]:
        """
        Apply `edits` to the record and return it as it is after the update.

        Returns None when no record has this id. Validators run on every
        assigned field before anything is written.
        """
        blog = await self.session.get(BlogPost, blog_id)
        if blog is None:
            return None
        for field, value in edits.items():
            setattr(blog, field, value)
        if edits:
            await self.session.flush()
            await self.session.commit()
            # Reload so updated_at reflects the write
            await self.session.refresh(blog)
        return blog

    async def delete_by_id(self, blog_id: uuid.UUID) -> Optional[BlogPost]:
        """Delete the record and return it, or None when nothing matched."""
        blog = await self.session.get(BlogPost, blog_id)
        if blog is None:
            return None
        await self.session.delete(blog)
        await self.session.flush()
        await self.session.commit()
        return blog
