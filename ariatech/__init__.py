"""
AriaTech - Computer Store
=========================

A Flask storefront with an admin-managed product catalog backed by Supabase:
- Public product listing, category filter, promotional slider
- Product detail pages with related products
- Admin dashboard for products and slider images
- Image uploads to Supabase Storage (or the local static folder)

Usage:
    from ariatech import create_app

    app = create_app()
    app.run(port=app.config['PORT'])
"""

__version__ = '0.1.0'

from flask import Flask, jsonify, render_template, request

from .core import Config, LoggingService, SupabaseClient
from .core.errors import NotFound, StorageFailure, UploadRejected, ValidationError

UPLOAD_FORM_OVERHEAD = 64 * 1024


class AriaTech:
    """Flask extension wiring the store, catalog repository and blueprints into an app"""

    def __init__(self, app=None, config=None, store=None):
        self._config = config or {}
        self.store = store
        self.repository = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        from .modules.catalog import CatalogRepository

        # Flask pre-populates some keys (SECRET_KEY) with None
        for key, value in Config.as_dict().items():
            if app.config.get(key) is None:
                app.config[key] = value
        app.config.update(self._config)

        # Session security
        app.config['SESSION_COOKIE_HTTPONLY'] = True
        app.config['SESSION_COOKIE_SAMESITE'] = app.config.get('SESSION_COOKIE_SAMESITE') or 'Lax'
        app.config['PERMANENT_SESSION_LIFETIME'] = app.config['ADMIN_SESSION_MAX_AGE']

        # Reject oversize bodies before werkzeug spools them; the slack covers form fields
        if app.config.get('MAX_CONTENT_LENGTH') is None:
            app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_UPLOAD_SIZE'] + UPLOAD_FORM_OVERHEAD

        LoggingService.configure('DEBUG' if app.debug else 'INFO')

        if self.store is None:
            self.store = SupabaseClient.from_config(app.config)
        self.repository = CatalogRepository(
            self.store,
            products_table=app.config['PRODUCTS_TABLE'],
            slider_table=app.config['SLIDER_TABLE'],
        )

        app.extensions['ariatech'] = self
        self._register_blueprints(app)
        register_error_handlers(app)
        self._register_template_context(app)

        LoggingService.info('system', 'AriaTech initialised', {
            'storage_type': app.config['STORAGE_TYPE'],
            'products_table': app.config['PRODUCTS_TABLE'],
        })

    def _register_blueprints(self, app):
        from .modules.dashboard import dashboard_bp
        from .modules.ops import ops_health_bp
        from .modules.storefront import storefront_bp

        app.register_blueprint(storefront_bp)
        app.register_blueprint(dashboard_bp)
        app.register_blueprint(ops_health_bp)

    def _register_template_context(self, app):
        from .modules.catalog import CATEGORY_LABELS
        from .modules.dashboard.auth import current_admin

        @app.context_processor
        def inject_store_context():
            return {
                'brand_name': app.config.get('BRAND_NAME', 'AriaTech'),
                'category_labels': CATEGORY_LABELS,
                'is_admin': current_admin() is not None,
            }


def register_error_handlers(app):
    """Map store errors to responses: 400 for bad input, 404, 502 for the backend"""

    def _render_error(error, status):
        return render_template('storefront/error.html', message=error.message, status=status), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        LoggingService.info('http', f'Rejected request: {error.message}', error.details)
        return _render_error(error, 400)

    @app.errorhandler(UploadRejected)
    def handle_upload_rejected(error):
        LoggingService.info('http', f'Rejected upload: {error.message}', error.details)
        return _render_error(error, 400)

    @app.errorhandler(413)
    def handle_request_too_large(error):
        limit_mb = app.config['MAX_UPLOAD_SIZE'] // (1024 * 1024)
        rejected = UploadRejected(f'File too large (limit {limit_mb} MB)',
                                  {'content_length': request.content_length})
        LoggingService.info('http', f'Rejected upload: {rejected.message}', rejected.details)
        if request.endpoint == 'admin.upload_image':
            return jsonify({'success': False, 'error': rejected.message}), 400
        return _render_error(rejected, 400)

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return render_template('storefront/not_found.html', message=error.message), 404

    @app.errorhandler(404)
    def handle_http_not_found(error):
        return render_template('storefront/not_found.html', message='Page not found'), 404

    @app.errorhandler(StorageFailure)
    def handle_storage_failure(error):
        LoggingService.log_storage_failure('http', 'request', error)
        return _render_error(error, 502)


def create_app(config=None, store=None):
    """Application factory.

    Args:
        config: Dict of settings layered over ``Config`` (e.g. for tests)
        store: Storage client to use instead of building a SupabaseClient
    """
    app = Flask(__name__)
    AriaTech(app, config=config, store=store)
    return app


__all__ = ['AriaTech', 'create_app', '__version__']
