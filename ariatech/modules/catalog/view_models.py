"""
Catalog view models: pure groupings of an already-fetched product list.
No I/O; every function accepts any sequence (including an empty one).
"""

from .models import ALL_CATEGORIES, CATEGORY_CODES, DEFAULT_CATEGORY


def partition_by_special(products):
    """Split into (special, regular), keeping relative order in each"""
    special, regular = [], []
    for product in products:
        (special if product.is_special else regular).append(product)
    return special, regular


def filter_by_category(products, category_filter=None):
    """Products in ``category_filter``; the input itself for None or "all" """
    if not category_filter or category_filter == ALL_CATEGORIES:
        return products
    return [p for p in products if p.category == category_filter]


def related_products(all_products, subject):
    """Other products sharing the subject's category, in input order"""
    if subject is None:
        return []
    return [
        p for p in all_products
        if p.category == subject.category and p.id != subject.id
    ]


def group_by_category(products):
    """(category, products) pairs in display order; empty categories omitted.

    Categories outside the fixed list are gathered after it, "Other" last.
    """
    buckets = {}
    for product in products:
        buckets.setdefault(product.category, []).append(product)

    ordered = [code for code in CATEGORY_CODES if code in buckets]
    extra = sorted(code for code in buckets if code not in CATEGORY_CODES and code != DEFAULT_CATEGORY)
    ordered.extend(extra)
    if DEFAULT_CATEGORY in buckets:
        ordered.append(DEFAULT_CATEGORY)

    return [(code, buckets[code]) for code in ordered]
