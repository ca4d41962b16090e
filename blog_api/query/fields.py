"""
External (camelCase) to column (snake_case) name tables

Only fields listed here can be written through a partial update. Unknown
names are a programming error and raise instead of being guessed.
"""
from typing import Any, Dict, Mapping

USER_UPDATE_COLUMNS: Dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "avatarUrl": "avatar_url",
}

POST_UPDATE_COLUMNS: Dict[str, str] = {
    "title": "title",
    "content": "content",
    "slug": "slug",
    "status": "status",
    "featuredImage": "featured_image",
    "tags": "tags",
}


class UnknownFieldError(KeyError):
    pass


def to_columns(fields: Mapping[str, Any], table: Mapping[str, str]) -> Dict[str, Any]:
    """Rename every key through `table`, keeping insertion order."""
    columns: Dict[str, Any] = {}
    for name, value in fields.items():
        try:
            columns[table[name]] = value
        except KeyError:
            raise UnknownFieldError(name) from None
    return columns
