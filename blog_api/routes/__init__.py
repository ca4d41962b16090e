"""API routers"""
from . import auth, posts, system, users

__all__ = ["auth", "posts", "system", "users"]
