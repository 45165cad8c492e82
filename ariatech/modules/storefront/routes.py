"""
Storefront Routes
=================

GET /                  product listing, optional ?category=<code>
GET /product/<id>      product detail with related products
"""

import logging

from flask import render_template, request

from . import storefront_bp
from ..catalog import (
    ALL_CATEGORIES, CATEGORIES, CATEGORY_LABELS, get_repository,
    group_by_category, partition_by_special, related_products,
)
from ...core.errors import NotFound

logger = logging.getLogger(__name__)


@storefront_bp.route('/')
def index():
    """Product listing with slider and featured products"""
    category = request.args.get('category', ALL_CATEGORIES)
    if category not in CATEGORY_LABELS:
        category = ALL_CATEGORIES

    repo = get_repository()
    products = repo.list_products(category)
    special_products, regular_products = partition_by_special(products)

    return render_template(
        'storefront/index.html',
        products=products,
        special_products=special_products,
        regular_products=regular_products,
        grouped_products=group_by_category(regular_products),
        slider_images=repo.list_slider_images(),
        categories=CATEGORIES,
        active_category=category,
    )


@storefront_bp.route('/product/<product_id>')
def product_detail(product_id):
    """Product detail page"""
    repo = get_repository()
    product = repo.get_product(product_id)
    if product is None:
        raise NotFound(f'Product {product_id} not found')

    same_category = repo.list_products(product.category)
    related = related_products(same_category, product)
    logger.debug(f"Product {product_id}: {len(related)} related products")

    return render_template(
        'storefront/product_detail.html',
        product=product,
        related_products=related,
    )
