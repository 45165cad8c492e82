"""
AriaTech Modules
================

Flask blueprints and catalog logic for the store.
"""

__all__ = ['catalog', 'dashboard', 'ops', 'storefront']
