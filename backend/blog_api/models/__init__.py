"""ORM models. Importing this package registers every table on Base.metadata."""

from blog_api.models.blog import BlogPost

__all__ = ["BlogPost"]
