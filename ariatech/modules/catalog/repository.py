"""
Catalog Repository
==================

Domain operations over the Supabase client. Storage failures are logged and
degrade to empty lists, None or False; they never reach the caller as
exceptions.
"""

import logging

from ...core.logging_service import LoggingService
from .models import ALL_CATEGORIES, Product, SliderImage

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Products and slider images, newest first"""

    ORDER_COLUMN = 'created_at'

    def __init__(self, store, products_table='products', slider_table='slider_images'):
        self.store = store
        self.products_table = products_table
        self.slider_table = slider_table

    # ===== Products =====

    def list_products(self, category_filter=None):
        """All products, or only those in ``category_filter`` (filtered by the store)"""
        filters = None
        if category_filter and category_filter != ALL_CATEGORIES:
            filters = {'category': category_filter}

        result = self.store.select(
            self.products_table, filters,
            order=self.ORDER_COLUMN, descending=True,
        )
        if not result.ok:
            LoggingService.log_storage_failure('catalog', 'list_products', result.error)
            return []
        return [Product.from_row(row) for row in result.data or []]

    def get_product(self, product_id):
        """One product, or None. A store error counts as not found."""
        result = self.store.select(self.products_table, {'id': product_id}, single=True)
        if not result.ok or not result.data:
            logger.info(f"Product {product_id} not found: {result.error!r}")
            return None
        return Product.from_row(result.data)

    def add_product(self, fields):
        """Insert a product; ``fields`` must already be validated"""
        result = self.store.insert(self.products_table, fields)
        if not result.ok:
            LoggingService.log_storage_failure('catalog', 'add_product', result.error)
            return None
        return Product.from_row(result.data)

    def delete_product(self, product_id):
        """True unless the store reports an error, even if no row matched"""
        result = self.store.delete(self.products_table, {'id': product_id})
        if not result.ok:
            LoggingService.log_storage_failure('catalog', 'delete_product', result.error)
            return False
        return True

    # ===== Slider images =====

    def list_slider_images(self):
        result = self.store.select(
            self.slider_table,
            order=self.ORDER_COLUMN, descending=True,
        )
        if not result.ok:
            LoggingService.log_storage_failure('catalog', 'list_slider_images', result.error)
            return []
        return [SliderImage.from_row(row) for row in result.data or []]

    def add_slider_image(self, image_url):
        result = self.store.insert(self.slider_table, {'image_url': image_url})
        if not result.ok:
            LoggingService.log_storage_failure('catalog', 'add_slider_image', result.error)
            return None
        return SliderImage.from_row(result.data)

    def delete_slider_image(self, image_id):
        result = self.store.delete(self.slider_table, {'id': image_id})
        if not result.ok:
            LoggingService.log_storage_failure('catalog', 'delete_slider_image', result.error)
            return False
        return True
