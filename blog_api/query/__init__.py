"""Query building: pagination, predicates and field-name tables"""
from .fields import POST_UPDATE_COLUMNS, USER_UPDATE_COLUMNS, UnknownFieldError, to_columns
from .pagination import Page, Pagination, normalize_pagination
from .predicates import AssignmentBuilder, BoundParams, PredicateBuilder, WhereClause

__all__ = [
    "POST_UPDATE_COLUMNS",
    "USER_UPDATE_COLUMNS",
    "UnknownFieldError",
    "to_columns",
    "Page",
    "Pagination",
    "normalize_pagination",
    "AssignmentBuilder",
    "BoundParams",
    "PredicateBuilder",
    "WhereClause",
]
