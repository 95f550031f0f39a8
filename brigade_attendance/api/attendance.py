"""Attendance API: listing, single and bulk marking."""
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.services.attendance_service import AttendanceService
from brigade_attendance.utils.decorators import admin_or_brigade_lead_required
from brigade_attendance.utils.helpers import (
    get_pagination_args,
    json_body,
    paginated_response,
    success_response,
)

attendance_bp = Blueprint('attendance', __name__)

def _serialize(record):
    return record.to_dict(include_student=True, include_event_day=True)

@attendance_bp.route('/', methods=['GET'])
@jwt_required()
def get_attendance():
    """Attendance records in the caller's scope, newest first."""
    page, limit = get_pagination_args(default_limit=50)
    query = AttendanceService.list_query(current_user, request.args)
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return paginated_response('records', pagination, _serialize)

@attendance_bp.route('/mark', methods=['POST'])
@admin_or_brigade_lead_required
def mark_attendance():
    record = AttendanceService.mark(current_user, json_body())
    current_app.logger.info(
        f"Attendance marked: {record.student_id} {record.session.value} "
        f"{record.status.value} by {current_user.email}"
    )
    return jsonify(_serialize(record))

@attendance_bp.route('/bulk-mark', methods=['POST'])
@admin_or_brigade_lead_required
def bulk_mark_attendance():
    """Mark several students with one status in a single transaction."""
    records = AttendanceService.bulk_mark(current_user, json_body())
    current_app.logger.info(
        f"Bulk attendance marked for {len(records)} students by {current_user.email}"
    )
    return success_response(
        f"Attendance marked for {len(records)} students",
        data={'records': [_serialize(record) for record in records]}
    )
