"""Custom decorators for authorization."""
from functools import wraps
from flask_jwt_extended import current_user, verify_jwt_in_request
from brigade_attendance.models.user import UserRole
from brigade_attendance.utils.helpers import error_response

def roles_required(*roles: UserRole):
    """Decorator to restrict a handler to the given roles.

    Verifies the bearer token first, so it can be used on its own or stacked
    under ``@jwt_required()``.
    """
    allowed = set(roles)

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            verify_jwt_in_request()
            user = current_user

            if not user:
                return error_response("Authentication required", 401)

            if user.role not in allowed:
                return error_response("Insufficient permissions", 403)

            return f(*args, **kwargs)
        return decorated_function
    return decorator

admin_required = roles_required(UserRole.ADMIN)
admin_or_brigade_lead_required = roles_required(UserRole.ADMIN, UserRole.BRIGADE_LEAD)
