"""Store access classes. Each repository wraps one AsyncSession."""

from blog_api.repositories.blog_repository import BlogRepository

__all__ = ["BlogRepository"]
