"""
Catalog Models
==============

Product and slider image records as read from the store, the fixed category
list, and validation of the admin product form.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from ...core.errors import ValidationError

# Display order matters: the storefront lists categories in this order
CATEGORIES = [
    ('computer-parts', 'Computer Parts'),
    ('oem-packages', 'OEM Packages'),
    ('computer', 'Computers'),
    ('peripherals', 'Peripherals'),
    ('storage', 'Storage'),
    ('games-and-hobbies', 'Games & Hobbies'),
    ('network', 'Network'),
    ('office-supplies', 'Office Supplies'),
    ('software', 'Software'),
    ('accessory', 'Accessories'),
]

DEFAULT_CATEGORY = 'Other'
ALL_CATEGORIES = 'all'

CATEGORY_CODES = [code for code, _ in CATEGORIES]
CATEGORY_LABELS = dict(CATEGORIES)
CATEGORY_LABELS[DEFAULT_CATEGORY] = 'Other'

TRUTHY_FORM_VALUES = ('on', 'true', '1', 'yes')


def _optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class Product:
    id: Any
    name: str
    price: float
    brand: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    image_url: Optional[str] = None
    description: Optional[str] = None
    is_special: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        """Build a Product from a store row, filling defaults for missing columns"""
        try:
            price = float(row.get('price') or 0)
        except (TypeError, ValueError):
            price = 0.0

        return cls(
            id=row.get('id'),
            name=row.get('name') or '',
            price=price,
            brand=_optional_text(row.get('brand')),
            category=row.get('category') or DEFAULT_CATEGORY,
            image_url=_optional_text(row.get('image_url')),
            description=_optional_text(row.get('description')),
            is_special=bool(row.get('is_special')),
            created_at=row.get('created_at'),
        )

    @property
    def category_label(self):
        return CATEGORY_LABELS.get(self.category, self.category)


@dataclass
class SliderImage:
    id: Any
    image_url: str
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            image_url=row.get('image_url') or '',
            created_at=row.get('created_at'),
        )


def parse_price(price_str):
    """Parse a price string into a finite, non-negative float"""
    try:
        price = float(price_str)
    except (TypeError, ValueError):
        raise ValidationError('Price must be a number', {'price': price_str})

    if not math.isfinite(price) or price < 0:
        raise ValidationError('Price must be a non-negative number', {'price': price_str})
    return price


def validate_product_fields(form, image_url=None):
    """
    Turn the admin product form into a row for insertion.

    Args:
        form: Mapping of submitted fields (request.form)
        image_url: Already-resolved image URL, or None

    Returns:
        Dict of product columns (without id/created_at)

    Raises:
        ValidationError: name or price missing, price malformed, unknown category
    """
    name = (form.get('name') or '').strip()
    price_str = (form.get('price') or '').strip()

    if not name or not price_str:
        raise ValidationError('Name and price are required')

    category = (form.get('category') or '').strip() or DEFAULT_CATEGORY
    if category not in CATEGORY_LABELS:
        raise ValidationError(f'Unknown category: {category}', {'category': category})

    return {
        'name': name,
        'brand': _optional_text(form.get('brand')),
        'price': parse_price(price_str),
        'category': category,
        'image_url': _optional_text(image_url),
        'description': _optional_text(form.get('description')),
        'is_special': (form.get('is_special') or '').strip().lower() in TRUTHY_FORM_VALUES,
    }
