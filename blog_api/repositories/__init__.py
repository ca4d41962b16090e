"""Entity repositories"""
from .posts import PostFilters, PostRepository
from .users import UserRepository

__all__ = ["PostFilters", "PostRepository", "UserRepository"]
