"""Notifications API."""
from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.services.notification_service import NotificationService
from brigade_attendance.utils.decorators import admin_required
from brigade_attendance.utils.helpers import get_pagination_args, json_body, paginated_response

notifications_bp = Blueprint('notifications', __name__)

@notifications_bp.route('/', methods=['GET'])
@jwt_required()
def get_notifications():
    """Get the caller's notifications, optionally unread only."""
    page, limit = get_pagination_args(default_limit=20)
    unread_only = request.args.get('unreadOnly', 'false').lower() == 'true'

    query = NotificationService.inbox_query(current_user, unread_only=unread_only)
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return paginated_response('notifications', pagination, lambda item: item.to_dict())

@notifications_bp.route('/unread-count', methods=['GET'])
@jwt_required()
def get_unread_count():
    return jsonify({'count': NotificationService.unread_count(current_user)})

@notifications_bp.route('/<notification_id>/read', methods=['PUT'])
@jwt_required()
def mark_as_read(notification_id):
    delivery = NotificationService.mark_read(current_user, notification_id)
    return jsonify(delivery.to_dict())

@notifications_bp.route('/', methods=['POST'])
@admin_required
def create_notification():
    """Create a notification and deliver it to its audience."""
    notification = NotificationService.create_notification(current_user, json_body())
    return jsonify(notification.to_dict()), 201
