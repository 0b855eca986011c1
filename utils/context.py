"""
Caller identity for one request.

The identity provider puts ``user_id`` and ``user_role`` into the session;
everything below the routes receives them as an explicit RequestContext
instead of reading the session itself.
"""
import logging
from collections import namedtuple
from functools import wraps

from flask import jsonify, session

from models import UserRoles

logger = logging.getLogger(__name__)


class RequestContext(namedtuple('RequestContext', ['user_id', 'role'])):
    __slots__ = ()

    @property
    def is_admin(self):
        return self.role == UserRoles.ADMIN

    def to_dict(self):
        return {'user_id': self.user_id, 'role': self.role}


def get_request_context():
    """Build the context from the session, or None when nobody is signed in"""
    user_id = session.get('user_id')
    role = (session.get('user_role') or '').lower()
    if not user_id or role not in UserRoles.ALL:
        return None
    return RequestContext(str(user_id), role)


def login_required(f):
    """Pass the RequestContext as ``ctx`` or answer 401"""
    @wraps(f)
    def wrapper(*args, **kwargs):
        ctx = get_request_context()
        if ctx is None:
            return jsonify({'success': False, 'message': 'Authentication required'}), 401
        return f(*args, ctx=ctx, **kwargs)
    return wrapper


def role_required(*roles):
    def decorator(f):
        @wraps(f)
        @login_required
        def wrapper(*args, ctx, **kwargs):
            if ctx.role not in roles:
                logger.warning("Access denied for %s (%s) on %s", ctx.user_id, ctx.role, f.__name__)
                return jsonify({'success': False, 'message': 'Access denied'}), 403
            return f(*args, ctx=ctx, **kwargs)
        return wrapper
    return decorator
