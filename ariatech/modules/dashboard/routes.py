"""
Admin Dashboard Routes
======================

Login, dashboard and catalog management for the store admin.
"""

from flask import render_template, request, redirect, url_for, flash, jsonify

from . import dashboard_bp
from .auth import (
    admin_api_required, admin_required, check_credentials, current_admin,
    issue_admin_token, revoke_admin_token,
)
from ..catalog import (
    CATEGORIES, get_repository, partition_by_special, validate_product_fields,
)
from ...core.errors import StorageFailure, UploadRejected
from ...core.logging_service import LoggingService
from ...core.storage import store_image


def _safe_next(target):
    """Only follow local redirect targets"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'GET' and current_admin() is not None:
        return redirect(url_for('admin.dashboard'))

    error = None
    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if check_credentials(username, password):
            issue_admin_token(username)
            LoggingService.log_user_action('auth', 'admin login', user_id=username)
            next_page = _safe_next(request.args.get('next'))
            return redirect(next_page or url_for('admin.dashboard'))

        LoggingService.log_security_event('Failed admin login', {'username': username})
        error = 'Invalid credentials'

    return render_template('dashboard/login.html', error=error)


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    revoke_admin_token()
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/', strict_slashes=False)
@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard: specials, regular products and slider images"""
    repo = get_repository()
    special_products, regular_products = partition_by_special(repo.list_products())
    slider_images = repo.list_slider_images()

    return render_template(
        'dashboard/dashboard.html',
        special_products=special_products,
        regular_products=regular_products,
        slider_images=slider_images,
    )


@dashboard_bp.route('/products/new')
@admin_required
def new_product():
    """New product form"""
    return render_template('dashboard/new_product.html', categories=CATEGORIES)


@dashboard_bp.route('/products', methods=['POST'])
@admin_required
def create_product():
    """Create a product from the form; an uploaded file beats an image URL"""
    # Validate before uploading anything
    fields = validate_product_fields(
        request.form,
        image_url=request.form.get('imageUrl') or request.form.get('image_url'),
    )

    image_file = request.files.get('imageFile')
    if image_file is not None and image_file.filename:
        fields['image_url'] = store_image(image_file, 'products')

    product = get_repository().add_product(fields)
    if product is None:
        raise StorageFailure('Could not save product')

    LoggingService.log_user_action('catalog', f'created product {product.id}',
                                   user_id=current_admin().username,
                                   details={'name': product.name, 'category': product.category})
    flash(f'Product "{product.name}" created', 'success')
    return redirect(url_for('admin.dashboard'))


@dashboard_bp.route('/products/<product_id>/delete', methods=['POST'])
@admin_required
def delete_product(product_id):
    """Delete product (deleting an unknown id still succeeds)"""
    if get_repository().delete_product(product_id):
        LoggingService.log_user_action('catalog', f'deleted product {product_id}',
                                       user_id=current_admin().username)
        flash('Product deleted', 'success')
    else:
        flash('Could not delete product', 'error')
    return redirect(url_for('admin.dashboard'))


@dashboard_bp.route('/upload-image', methods=['POST'])
@admin_api_required
def upload_image():
    """Upload a product image and return its URL"""
    try:
        image_url = store_image(request.files.get('image'), 'products')
    except UploadRejected as e:
        return jsonify({'success': False, 'error': e.message}), 400
    except StorageFailure as e:
        return jsonify({'success': False, 'error': f'Failed to upload image: {e.message}'}), 502

    return jsonify({'success': True, 'image_url': image_url})


@dashboard_bp.route('/upload-slider', methods=['POST'])
@admin_required
def upload_slider():
    """Upload an image and register it as a slider image"""
    image_url = store_image(request.files.get('image'), 'slider')

    slider_image = get_repository().add_slider_image(image_url)
    if slider_image is None:
        raise StorageFailure('Could not save slider image')

    LoggingService.log_user_action('catalog', f'added slider image {slider_image.id}',
                                   user_id=current_admin().username)
    flash('Slider image added', 'success')
    return redirect(url_for('admin.dashboard'))


@dashboard_bp.route('/slider/<image_id>/delete', methods=['POST'])
@admin_required
def delete_slider_image(image_id):
    """Delete slider image (deleting an unknown id still succeeds)"""
    if get_repository().delete_slider_image(image_id):
        flash('Slider image deleted', 'success')
    else:
        flash('Could not delete slider image', 'error')
    return redirect(url_for('admin.dashboard'))
