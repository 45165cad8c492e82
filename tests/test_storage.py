"""
Upload Storage Tests
====================

Image validation, collision-resistant naming and the cloud/local branches.
"""

import io
import os
import re

import pytest
from werkzeug.datastructures import FileStorage

from ariatech.core.errors import StorageFailure, UploadRejected
from ariatech.core.storage import (
    read_upload, store_image, unique_filename, upload_file, validate_upload,
)

MIB = 1024 * 1024


def make_file(content=b"\x89PNG....", filename="photo.png", content_type="image/png"):
    return FileStorage(stream=io.BytesIO(content), filename=filename, content_type=content_type)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("size", [0, 10, 2 * MIB, 3 * MIB])
def test_text_plain_rejected_regardless_of_size(size):
    with pytest.raises(UploadRejected):
        validate_upload("text/plain", size)


def test_oversized_png_rejected():
    with pytest.raises(UploadRejected):
        validate_upload("image/png", 3 * MIB)


def test_limit_is_inclusive():
    validate_upload("image/png", 2 * MIB)
    validate_upload("image/webp", 0)


def test_read_upload_reads_at_most_limit_plus_one(app):
    big = make_file(content=b"\0" * (3 * MIB))
    with app.test_request_context():
        with pytest.raises(UploadRejected, match="too large"):
            read_upload(big)


def test_read_upload_rejects_non_image_before_reading(app):
    stream = io.BytesIO(b"hello")
    text_file = FileStorage(stream=stream, filename="notes.txt", content_type="text/plain")
    with app.test_request_context():
        with pytest.raises(UploadRejected, match="Only image files"):
            read_upload(text_file)
    assert stream.tell() == 0


def test_read_upload_requires_a_file(app):
    with app.test_request_context():
        with pytest.raises(UploadRejected):
            read_upload(None)
        with pytest.raises(UploadRejected):
            read_upload(make_file(filename=""))


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def test_unique_filename_keeps_only_extension():
    name = unique_filename("My Holiday Photo.JPG")
    assert re.fullmatch(r"\d{13}-\d{1,10}\.jpg", name)
    assert "Holiday" not in name


def test_unique_filename_strips_path_tricks():
    name = unique_filename("../../etc/passwd.png")
    assert "/" not in name and ".." not in name
    assert name.endswith(".png")


@pytest.mark.parametrize("original", ["عکس.jpg", "محصول جدید.JPG", "写真.jpg"])
def test_unique_filename_keeps_extension_of_non_ascii_names(original):
    assert re.fullmatch(r"\d{13}-\d{1,10}\.jpg", unique_filename(original))


@pytest.mark.parametrize("original", ["photo.p<n>g", "photo.", "photo.averyveryverylongext"])
def test_unique_filename_drops_unsafe_extension(original):
    assert re.fullmatch(r"\d{13}-\d{1,10}", unique_filename(original))


def test_unique_filename_without_extension():
    assert re.fullmatch(r"\d{13}-\d{1,10}", unique_filename("blob"))


def test_unique_filenames_differ():
    names = {unique_filename("a.png") for _ in range(50)}
    assert len(names) > 1


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

def test_store_image_uploads_to_bucket(app, store):
    with app.test_request_context():
        url = store_image(make_file(), "slider")

    assert len(store.objects) == 1
    (bucket, path), (content, content_type) = next(iter(store.objects.items()))
    assert bucket == "product-images"
    assert path.startswith("slider/") and path.endswith(".png")
    assert content_type == "image/png"
    assert url == store.get_public_url(bucket, path)


def test_cloud_upload_failure_raises(app, store):
    store.fail = True
    with app.test_request_context():
        with pytest.raises(StorageFailure):
            upload_file(b"data", "x.png", "products", "image/png")


def test_local_storage_writes_static_file(app, tmp_path):
    app.config["STORAGE_TYPE"] = "local"
    app.static_folder = str(tmp_path)

    with app.test_request_context():
        url = upload_file(b"pixels", "1-2.png", "products", "image/png")

    assert url == "/static/uploads/products/1-2.png"
    with open(os.path.join(tmp_path, "uploads", "products", "1-2.png"), "rb") as f:
        assert f.read() == b"pixels"
