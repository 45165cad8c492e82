"""
Supabase Client
===============

Thin client over a Supabase project:
- row store through the PostgREST endpoint (/rest/v1/<table>)
- object store through the Storage endpoint (/storage/v1/object/...)

Every call returns a ``StoreResult``. Network and HTTP errors are captured as a
``StorageFailure`` in ``result.error`` instead of being raised.
"""

import logging
from urllib.parse import quote

import requests

from .errors import ConfigurationError, StorageFailure

logger = logging.getLogger(__name__)


class StoreResult:
    """Tagged outcome of a store call: ``data`` on success, ``error`` on failure"""

    __slots__ = ('data', 'error')

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error

    @property
    def ok(self):
        return self.error is None

    @classmethod
    def failure(cls, message, details=None, status=None):
        return cls(error=StorageFailure(message, details=details, status=status))

    def __repr__(self):
        if self.ok:
            return f"StoreResult(data={self.data!r})"
        return f"StoreResult(error={self.error!r})"


class SupabaseClient:
    """Row and object store access for one Supabase project"""

    def __init__(self, url, key, timeout=10, session=None):
        self.url = url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': key,
            'Authorization': f'Bearer {key}',
        })

    @classmethod
    def from_config(cls, config):
        """Build a client from a Flask config mapping, preferring the service key"""
        url = config.get('SUPABASE_URL')
        key = config.get('SUPABASE_SERVICE_KEY') or config.get('SUPABASE_ANON_KEY')
        if not url or not key:
            raise ConfigurationError('Missing Supabase credentials (SUPABASE_URL / SUPABASE_ANON_KEY)')
        return cls(url, key, timeout=config.get('SUPABASE_TIMEOUT', 10))

    # ===== Row store =====

    def select(self, table, filters=None, order=None, descending=False, single=False, limit=None):
        """
        Read rows from a table.

        Args:
            table: Table name
            filters: Dict of column -> value, each applied as an equality filter
            order: Column to order by (optional)
            descending: Order direction
            single: Return exactly one row as a dict; zero rows is an error
            limit: Maximum number of rows to return (optional)

        Returns:
            StoreResult with a list of row dicts (or one dict when ``single``)
        """
        params = {'select': '*'}
        params.update(self._filter_params(filters))
        if order:
            params['order'] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params['limit'] = limit

        headers = {}
        if single:
            headers['Accept'] = 'application/vnd.pgrst.object+json'

        return self._request('GET', self._table_url(table), params=params, headers=headers)

    def insert(self, table, row):
        """Insert one row and return it as stored (with generated columns)"""
        result = self._request(
            'POST', self._table_url(table),
            json=row,
            headers={'Prefer': 'return=representation'},
        )
        if not result.ok:
            return result

        rows = result.data
        if isinstance(rows, list):
            if not rows:
                return StoreResult.failure(f'Insert into {table} returned no row')
            return StoreResult(rows[0])
        return StoreResult(rows)

    def delete(self, table, filters):
        """Delete rows matching ``filters``. Matching zero rows is not an error."""
        if not filters:
            return StoreResult.failure(f'Refusing to delete from {table} without a filter')

        result = self._request(
            'DELETE', self._table_url(table),
            params=self._filter_params(filters),
            headers={'Prefer': 'return=minimal'},
        )
        if not result.ok:
            return result
        return StoreResult(None)

    # ===== Object store =====

    def upload(self, bucket, path, content, content_type):
        """Upload raw bytes to ``bucket/path``"""
        return self._request(
            'POST', f"{self.url}/storage/v1/object/{bucket}/{quote(path)}",
            data=content,
            headers={
                'Content-Type': content_type,
                'Cache-Control': 'max-age=3600',
                'x-upsert': 'false',
            },
        )

    def get_public_url(self, bucket, path):
        """Public URL of an object in a public bucket"""
        return f"{self.url}/storage/v1/object/public/{bucket}/{quote(path)}"

    # ===== Internals =====

    def _table_url(self, table):
        return f"{self.url}/rest/v1/{table}"

    @staticmethod
    def _filter_params(filters):
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    def _request(self, method, url, **kwargs):
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Supabase {method} {url} failed: {e}")
            return StoreResult.failure(f'{method} request failed: {e}')

        if resp.status_code >= 400:
            message, details = self._error_payload(resp)
            logger.warning(f"Supabase {method} {url} answered {resp.status_code}: {message}")
            return StoreResult.failure(message, details=details, status=resp.status_code)

        if not resp.content:
            return StoreResult(None)

        try:
            return StoreResult(resp.json())
        except ValueError:
            return StoreResult.failure('Malformed JSON in store response', status=resp.status_code)

    @staticmethod
    def _error_payload(resp):
        """Pull message/details out of a PostgREST or Storage error body"""
        try:
            body = resp.json()
        except ValueError:
            return resp.text or f'HTTP {resp.status_code}', None

        if isinstance(body, dict):
            message = body.get('message') or body.get('error') or f'HTTP {resp.status_code}'
            details = body.get('details') or body.get('hint')
            return message, details
        return f'HTTP {resp.status_code}', body
