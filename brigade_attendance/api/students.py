"""Student Management API."""
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.services.student_service import StudentService
from brigade_attendance.utils.decorators import admin_or_brigade_lead_required, admin_required
from brigade_attendance.utils.helpers import (
    get_pagination_args,
    json_body,
    paginated_response,
    success_response,
)

students_bp = Blueprint('students', __name__)

@students_bp.route('/', methods=['GET'])
@jwt_required()
def get_students():
    """Get students in the caller's scope with search and brigade filters."""
    page, limit = get_pagination_args()
    query = StudentService.list_query(
        current_user,
        search=request.args.get('search'),
        brigade_id=request.args.get('brigadeId')
    )
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return paginated_response(
        'students', pagination,
        lambda student: student.to_dict(include_brigade=True, include_user=True)
    )

@students_bp.route('/<student_id>', methods=['GET'])
@jwt_required()
def get_student(student_id):
    """Get single student details with attendance history."""
    student = StudentService.get_visible(current_user, student_id)
    return jsonify(StudentService.detail(student))

@students_bp.route('/', methods=['POST'])
@admin_or_brigade_lead_required
def create_student():
    student = StudentService.create_student(current_user, json_body())
    current_app.logger.info(
        f"Student created: {student.temp_roll_number} by {current_user.email}"
    )
    return jsonify(student.to_dict(include_brigade=True, include_user=True)), 201

@students_bp.route('/<student_id>', methods=['PUT'])
@admin_or_brigade_lead_required
def update_student(student_id):
    student = StudentService.update_student(current_user, student_id, json_body())
    return jsonify(student.to_dict(include_brigade=True, include_user=True))

@students_bp.route('/<student_id>', methods=['DELETE'])
@admin_required
def delete_student(student_id):
    StudentService.delete_student(student_id)
    current_app.logger.info(f"Student deleted: {student_id} by {current_user.email}")
    return success_response("Student deleted successfully")
