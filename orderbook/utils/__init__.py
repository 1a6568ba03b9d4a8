"""Utility functions and helpers."""

from .normalization import (
    title_case,
    clean_text,
    normalize_product,
    normalize_order,
    is_valid_order,
    validate_order,
)
from .uuid import generate_uuid, is_valid_uuid

__all__ = [
    'title_case',
    'clean_text',
    'normalize_product',
    'normalize_order',
    'is_valid_order',
    'validate_order',
    'generate_uuid',
    'is_valid_uuid'
]
