"""Analytics API."""
from flask import Blueprint, jsonify
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.services.dashboard_service import DashboardService

analytics_bp = Blueprint('analytics', __name__)

@analytics_bp.route('/dashboard', methods=['GET'])
@jwt_required()
def get_dashboard():
    """Role-specific dashboard statistics for the caller."""
    return jsonify(DashboardService.build(current_user))
