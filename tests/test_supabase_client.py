"""
Supabase Client Tests
=====================

Request shapes sent to PostgREST / Storage and error capture, with the
requests session mocked out.
"""

from unittest.mock import MagicMock

import pytest
import requests

from ariatech.core.database import StoreResult, SupabaseClient
from ariatech.core.errors import ConfigurationError, StorageFailure


def fake_response(status_code=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    if payload is None:
        resp.content = text.encode()
        resp.text = text
        resp.json.side_effect = ValueError("no json")
    else:
        resp.content = b"{...}"
        resp.text = str(payload)
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return SupabaseClient("https://proj.supabase.co/", "service-key", timeout=5, session=session)


def test_auth_headers_set_on_session(client, session):
    assert session.headers["apikey"] == "service-key"
    assert session.headers["Authorization"] == "Bearer service-key"
    assert client.url == "https://proj.supabase.co"


def test_select_with_filter_and_order(client, session):
    session.request.return_value = fake_response(200, [{"id": 1}])

    result = client.select("products", {"category": "network"}, order="created_at", descending=True)

    assert result.ok
    assert result.data == [{"id": 1}]
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "GET"
    assert url == "https://proj.supabase.co/rest/v1/products"
    assert kwargs["params"] == {
        "select": "*",
        "category": "eq.network",
        "order": "created_at.desc",
    }
    assert kwargs["timeout"] == 5


def test_select_with_limit(client, session):
    session.request.return_value = fake_response(200, [{"id": 1}])

    client.select("slider_images", limit=1)

    assert session.request.call_args.kwargs["params"] == {"select": "*", "limit": 1}


def test_select_single_requests_object(client, session):
    session.request.return_value = fake_response(200, {"id": "abc"})

    result = client.select("products", {"id": "abc"}, single=True)

    assert result.data == {"id": "abc"}
    headers = session.request.call_args.kwargs["headers"]
    assert headers["Accept"] == "application/vnd.pgrst.object+json"


def test_select_single_zero_rows_is_failure(client, session):
    session.request.return_value = fake_response(406, {
        "code": "PGRST116",
        "message": "JSON object requested, multiple (or no) rows returned",
        "details": "The result contains 0 rows",
    })

    result = client.select("products", {"id": "missing"}, single=True)

    assert not result.ok
    assert isinstance(result.error, StorageFailure)
    assert result.error.status == 406
    assert result.error.details == "The result contains 0 rows"


def test_insert_returns_first_row(client, session):
    session.request.return_value = fake_response(201, [{"id": "new", "name": "Mouse"}])

    result = client.insert("products", {"name": "Mouse"})

    assert result.data == {"id": "new", "name": "Mouse"}
    kwargs = session.request.call_args.kwargs
    assert kwargs["json"] == {"name": "Mouse"}
    assert kwargs["headers"]["Prefer"] == "return=representation"


def test_insert_with_empty_representation_fails(client, session):
    session.request.return_value = fake_response(201, [])
    assert not client.insert("products", {"name": "Mouse"}).ok


def test_delete_with_no_content_succeeds(client, session):
    session.request.return_value = fake_response(204, text="")

    result = client.delete("products", {"id": "gone"})

    assert result.ok
    assert result.data is None
    method = session.request.call_args.args[0]
    assert method == "DELETE"
    assert session.request.call_args.kwargs["params"] == {"id": "eq.gone"}


def test_delete_without_filter_is_refused(client, session):
    result = client.delete("products", {})
    assert not result.ok
    session.request.assert_not_called()


def test_network_error_becomes_failure(client, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    result = client.select("products")

    assert not result.ok
    assert "connection refused" in result.error.message


def test_non_json_error_body(client, session):
    session.request.return_value = fake_response(500, text="Internal Server Error")

    result = client.select("products")

    assert result.error.status == 500
    assert result.error.message == "Internal Server Error"


def test_upload_and_public_url(client, session):
    session.request.return_value = fake_response(200, {"Key": "product-images/products/a b.png"})

    result = client.upload("product-images", "products/a b.png", b"\x89PNG", "image/png")

    assert result.ok
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "POST"
    assert url == "https://proj.supabase.co/storage/v1/object/product-images/products/a%20b.png"
    assert kwargs["data"] == b"\x89PNG"
    assert kwargs["headers"]["Content-Type"] == "image/png"
    assert client.get_public_url("product-images", "products/x.png") == (
        "https://proj.supabase.co/storage/v1/object/public/product-images/products/x.png"
    )


def test_from_config_prefers_service_key():
    c = SupabaseClient.from_config({
        "SUPABASE_URL": "https://proj.supabase.co",
        "SUPABASE_ANON_KEY": "anon",
        "SUPABASE_SERVICE_KEY": "service",
    })
    assert c.session.headers["apikey"] == "service"


def test_from_config_requires_credentials():
    with pytest.raises(ConfigurationError):
        SupabaseClient.from_config({"SUPABASE_URL": "https://proj.supabase.co"})


def test_store_result_repr():
    assert StoreResult([1]).ok
    assert "error" in repr(StoreResult.failure("boom"))
