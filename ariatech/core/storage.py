"""
Storage Utility
===============

Shared image upload with cloud (Supabase Storage) / local branching.
Product images and slider images both go through ``store_image``.
"""

import os
import random
import re
import time

from flask import current_app

from .errors import StorageFailure, UploadRejected
from .logging_service import LoggingService

ALLOWED_MIME_PREFIX = 'image/'
DEFAULT_MAX_UPLOAD_SIZE = 2 * 1024 * 1024
_SAFE_EXTENSION = re.compile(r'\.[A-Za-z0-9]{1,10}')


def unique_filename(original_filename):
    """Collision-resistant name: <epoch millis>-<random><original extension>.

    The original base name is discarded, whatever script it is written in.
    Only a short alphanumeric extension survives.
    """
    ext = os.path.splitext(os.path.basename(original_filename or ''))[1]
    ext = ext.lower() if _SAFE_EXTENSION.fullmatch(ext) else ''
    return f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{ext}"


def validate_upload(content_type, size, max_size=DEFAULT_MAX_UPLOAD_SIZE):
    """Raise UploadRejected unless the file is an image no larger than max_size.

    The type check comes first, so a non-image is rejected whatever its size.
    """
    if not content_type or not content_type.startswith(ALLOWED_MIME_PREFIX):
        raise UploadRejected('Only image files are allowed', {'content_type': content_type})
    if size > max_size:
        raise UploadRejected(
            f'File too large (limit {max_size // (1024 * 1024)} MB)',
            {'size': size, 'limit': max_size},
        )


def read_upload(file, max_size=None):
    """Validate a werkzeug FileStorage and return its bytes"""
    if file is None or not file.filename:
        raise UploadRejected('No file selected')

    if max_size is None:
        max_size = current_app.config.get('MAX_UPLOAD_SIZE', DEFAULT_MAX_UPLOAD_SIZE)

    # Type first, before touching the stream
    validate_upload(file.mimetype, 0, max_size)

    # MAX_CONTENT_LENGTH caps the request body; this catches files that fit
    # within that slack but still exceed the upload limit
    file_bytes = file.stream.read(max_size + 1)
    validate_upload(file.mimetype, len(file_bytes), max_size)
    return file_bytes


def is_cloud_storage():
    """Check if uploads go to the Supabase bucket"""
    return current_app.config.get('STORAGE_TYPE', 'supabase') != 'local'


def upload_file(file_bytes, filename, subfolder, content_type):
    """Upload file to cloud storage or local filesystem.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Target filename (e.g. "1700000000000-123.jpg").
        subfolder: Subfolder name ("products" or "slider").
        content_type: MIME type declared by the client.

    Returns:
        Public URL (cloud) or local path like "/static/uploads/products/x.jpg" (local).

    Raises:
        StorageFailure: when the object store rejects the upload.
    """
    if is_cloud_storage():
        return _upload_to_supabase(file_bytes, filename, subfolder, content_type)
    return _save_locally(file_bytes, filename, subfolder)


def _upload_to_supabase(file_bytes, filename, subfolder, content_type):
    """Upload to the configured Supabase Storage bucket."""
    store = current_app.extensions['ariatech'].store
    bucket = current_app.config.get('STORAGE_BUCKET', 'product-images')
    object_path = f"{subfolder}/{filename}"

    result = store.upload(bucket, object_path, file_bytes, content_type)
    if not result.ok:
        LoggingService.log_storage_failure('storage', f'upload {object_path}', result.error)
        raise result.error

    return store.get_public_url(bucket, object_path)


def _save_locally(file_bytes, filename, subfolder):
    """Save to local static folder."""
    upload_dir = os.path.join(current_app.static_folder, 'uploads', subfolder)
    os.makedirs(upload_dir, exist_ok=True)
    filepath = os.path.join(upload_dir, filename)
    try:
        with open(filepath, 'wb') as f:
            f.write(file_bytes)
    except OSError as e:
        raise StorageFailure(f'Could not write {filepath}: {e}')
    return f"/static/uploads/{subfolder}/{filename}"


def store_image(file, subfolder):
    """Validate, rename and upload an image file. Returns its public URL."""
    file_bytes = read_upload(file)
    filename = unique_filename(file.filename)
    url = upload_file(file_bytes, filename, subfolder, file.mimetype)
    LoggingService.info('storage', f'Stored image {filename}', {
        'subfolder': subfolder,
        'size': len(file_bytes),
    })
    return url
