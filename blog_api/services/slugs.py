"""Slug generation for post URLs"""
import re
import time
from typing import Optional

SLUG_MAX_LENGTH = 255

_NON_WORD = re.compile(r"[^\w ]+", re.ASCII)
_SPACES = re.compile(r" +")
_EDGE_DASHES = re.compile(r"^-+|-+$")


def slugify(title: str) -> str:
    slug = _NON_WORD.sub("", title.lower())
    slug = _SPACES.sub("-", slug)
    return _EDGE_DASHES.sub("", slug)


def generate_slug(title: str, suffix: Optional[int] = None) -> str:
    """slugify(title) plus a millisecond timestamp so equal titles stay unique"""
    if suffix is None:
        suffix = int(time.time() * 1000)
    tail = str(suffix)
    base = slugify(title)[: SLUG_MAX_LENGTH - len(tail) - 1].rstrip("-")
    return f"{base}-{tail}" if base else tail
