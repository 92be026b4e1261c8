"""
Caller identity for the Academic Metrics Engine API

The auth gateway validates credentials and forwards the caller as
X-User-Id / X-User-Role headers; this module only reads and checks them.
"""

from flask import current_app, g, jsonify, request

from database import db
from models.enums import Role
from services import MetricsServices
from utils.exceptions import AuthenticationError, AuthorizationError
from utils.validators import optional_id, validate_id

class Identity:
    """Caller identity forwarded by the gateway"""

    def __init__(self, user_id, role):
        self.user_id = user_id
        self.role = role

    def __repr__(self):
        return f'<Identity {self.role.value}:{self.user_id}>'

def load_identity():
    """Parse the identity headers or raise AuthenticationError"""
    raw_id = request.headers.get('X-User-Id')
    raw_role = request.headers.get('X-User-Role', '')

    is_valid, _ = validate_id(raw_id, 'X-User-Id')
    if not is_valid:
        raise AuthenticationError("Missing or invalid caller identity")

    try:
        role = Role(raw_role.strip().upper())
    except ValueError:
        raise AuthenticationError("Missing or invalid caller role")

    return Identity(int(raw_id), role)

def role_required(*roles):
    """Decorator to require a caller identity with one of the given roles"""
    def decorator(f):
        def decorated_function(*args, **kwargs):
            g.identity = load_identity()

            if roles and g.identity.role not in roles:
                raise AuthorizationError("Access denied for role " + g.identity.role.value)

            return f(*args, **kwargs)

        decorated_function.__name__ = f.__name__
        return decorated_function
    return decorator

def ensure_student_scope(student_id):
    """Students may only read their own metrics"""
    identity = g.identity
    if identity.role == Role.STUDENT and identity.user_id != student_id:
        raise AuthorizationError("Students may only access their own records")

def get_services():
    """Services bound to the request's session"""
    return MetricsServices(db.session, current_app.config, current_app.extensions['metrics_locks'])

def success_response(data=None, message="OK", status=200):
    return jsonify({'success': True, 'message': message, 'data': data}), status

def acting_professor_id(payload):
    """The professor a mutation is performed as; must match the caller"""
    claimed = payload.get('professor_id')
    if claimed is not None and optional_id(claimed, 'professor_id') != g.identity.user_id:
        raise AuthorizationError("Professors may only act as themselves")
    return g.identity.user_id
