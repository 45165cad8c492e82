"""
Dashboard Module
================

Admin interface for the store.

Provides:
- Admin login/logout with signed session tokens
- Dashboard with special products, regular products and slider images
- Product creation (file upload or image URL) and deletion
- Slider image upload and deletion
"""

from flask import Blueprint

# Blueprint name is 'admin' so endpoints read admin.login, admin.dashboard, ...
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
