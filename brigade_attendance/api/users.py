"""User Management API."""
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.services.user_service import UserService
from brigade_attendance.utils.decorators import admin_required
from brigade_attendance.utils.helpers import (
    get_pagination_args,
    json_body,
    paginated_response,
    success_response,
)

users_bp = Blueprint('users', __name__)

@users_bp.route('/', methods=['GET'])
@admin_required
def get_users():
    """List active users with role and search filters."""
    page, limit = get_pagination_args()
    query = UserService.list_query(
        role=request.args.get('role'),
        search=request.args.get('search')
    )
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return paginated_response('users', pagination, lambda user: user.to_dict())

@users_bp.route('/', methods=['POST'])
@admin_required
def create_user():
    user = UserService.create_user(json_body())
    current_app.logger.info(f"User created: {user.email} by {current_user.email}")
    return jsonify(user.to_dict()), 201

@users_bp.route('/change-password', methods=['PUT'])
@jwt_required()
def change_password():
    """Change the caller's own password."""
    UserService.change_password(current_user, json_body())
    return success_response("Password updated successfully")
