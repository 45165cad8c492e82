"""
Storefront Module
=================

Public pages: product listing with category filter and slider, product detail
with related products.
"""

from flask import Blueprint

storefront_bp = Blueprint(
    'storefront',
    __name__,
    template_folder='templates'
)

from . import routes

__all__ = ['storefront_bp']
