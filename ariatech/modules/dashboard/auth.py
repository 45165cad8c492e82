"""
Admin session tokens.

Login issues a signed, time-limited token kept in the Flask session. Every
protected request re-validates it and exposes the result as ``g.admin``.
"""

import hmac
from dataclasses import dataclass
from functools import wraps

from flask import current_app, g, jsonify, redirect, request, session, url_for
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ...core.logging_service import LoggingService

SESSION_KEY = 'admin_token'
TOKEN_SALT = 'ariatech-admin-session'


@dataclass
class AdminIdentity:
    username: str
    can_manage_catalog: bool = True


def _serializer():
    return URLSafeTimedSerializer(current_app.secret_key, salt=TOKEN_SALT)


def check_credentials(username, password):
    """Compare against the configured admin account in constant time"""
    expected_user = current_app.config.get('ADMIN_USERNAME') or ''
    expected_password = current_app.config.get('ADMIN_PASSWORD') or ''
    if not expected_password:
        LoggingService.warning('auth', 'ADMIN_PASSWORD is not set; admin login disabled')
        return False

    user_ok = hmac.compare_digest((username or '').encode(), expected_user.encode())
    password_ok = hmac.compare_digest((password or '').encode(), expected_password.encode())
    return user_ok and password_ok


def issue_admin_token(username):
    """Sign a token for ``username`` and store it in the session"""
    token = _serializer().dumps({'sub': username, 'scope': 'catalog'})
    session.clear()
    session[SESSION_KEY] = token
    session.permanent = True
    return token


def load_admin_identity(token):
    """Validate a token; None when missing, tampered with or expired"""
    if not token:
        return None

    max_age = current_app.config.get('ADMIN_SESSION_MAX_AGE', 24 * 60 * 60)
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        LoggingService.info('auth', 'Admin session expired')
        return None
    except BadSignature:
        LoggingService.log_security_event('Invalid admin session token')
        return None

    return AdminIdentity(
        username=payload.get('sub', ''),
        can_manage_catalog=payload.get('scope') == 'catalog',
    )


def current_admin():
    """AdminIdentity for this request (cached on ``g``), or None"""
    if 'admin' not in g:
        g.admin = load_admin_identity(session.get(SESSION_KEY))
    return g.admin


def revoke_admin_token():
    session.pop(SESSION_KEY, None)
    g.pop('admin', None)


def admin_required(f):
    """Decorator to require an admin session (redirects to login)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        admin = current_admin()
        if admin is None or not admin.can_manage_catalog:
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def admin_api_required(f):
    """Decorator to require an admin session (JSON 401 for API calls)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        admin = current_admin()
        if admin is None or not admin.can_manage_catalog:
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
