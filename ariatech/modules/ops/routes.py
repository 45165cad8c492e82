"""
Ops Routes
==========

Public health endpoint.
"""

import time

from flask import current_app, jsonify

from . import ops_health_bp


def _check_store():
    """Round-trip to the row store; a failed select is critical"""
    ext = current_app.extensions['ariatech']
    started = time.monotonic()
    result = ext.store.select(current_app.config.get('SLIDER_TABLE', 'slider_images'), limit=1)
    elapsed_ms = round((time.monotonic() - started) * 1000, 1)

    if result.ok:
        return {'status': 'ok', 'latency_ms': elapsed_ms}
    return {'status': 'critical', 'latency_ms': elapsed_ms, 'error': result.error.message}


@ops_health_bp.route('', methods=['GET'])
def health():
    """Health check for uptime monitors. 200 when the store answers, 503 otherwise."""
    from ... import __version__

    checks = {'store': _check_store()}
    status = 'critical' if any(c['status'] == 'critical' for c in checks.values()) else 'ok'

    return jsonify({
        'status': status,
        'version': __version__,
        'checks': checks,
    }), 200 if status == 'ok' else 503
