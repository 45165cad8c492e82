"""
Catalog Module
==============

Product catalog data access and presentation groupings.

Provides:
- CatalogRepository: product and slider image CRUD over the Supabase client
- view_models: special/regular partition, category filter, related products
"""

from flask import current_app

from .models import (
    ALL_CATEGORIES, CATEGORIES, CATEGORY_CODES, CATEGORY_LABELS, DEFAULT_CATEGORY,
    Product, SliderImage, validate_product_fields,
)
from .repository import CatalogRepository
from .view_models import (
    filter_by_category, group_by_category, partition_by_special, related_products,
)


def get_repository():
    """The CatalogRepository of the running app"""
    return current_app.extensions['ariatech'].repository


__all__ = [
    'ALL_CATEGORIES', 'CATEGORIES', 'CATEGORY_CODES', 'CATEGORY_LABELS', 'DEFAULT_CATEGORY',
    'Product', 'SliderImage', 'validate_product_fields', 'CatalogRepository',
    'filter_by_category', 'group_by_category', 'partition_by_special', 'related_products',
    'get_repository',
]
