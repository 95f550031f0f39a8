"""Brigade API."""
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.services.brigade_service import BrigadeService
from brigade_attendance.utils.decorators import admin_or_brigade_lead_required, admin_required
from brigade_attendance.utils.helpers import json_body, success_response

brigades_bp = Blueprint('brigades', __name__)

@brigades_bp.route('/', methods=['GET'])
@jwt_required()
def get_brigades():
    """Active brigades visible to the caller, with leader and students."""
    brigades = BrigadeService.visible_brigades(current_user)
    return jsonify([
        brigade.to_dict(include_leader=True, include_students=True)
        for brigade in brigades
    ])

@brigades_bp.route('/<brigade_id>', methods=['GET'])
@admin_or_brigade_lead_required
def get_brigade(brigade_id):
    brigade = BrigadeService.get_visible(current_user, brigade_id)
    return jsonify(brigade.to_dict(include_leader=True, include_students=True, student_detail=True))

@brigades_bp.route('/', methods=['POST'])
@admin_required
def create_brigade():
    brigade = BrigadeService.create_brigade(json_body())
    current_app.logger.info(f"Brigade created: {brigade.name} by {current_user.email}")
    return jsonify(brigade.to_dict(include_leader=True, include_students=True)), 201

@brigades_bp.route('/<brigade_id>', methods=['PUT'])
@admin_required
def update_brigade(brigade_id):
    brigade = BrigadeService.update_brigade(brigade_id, json_body())
    current_app.logger.info(f"Brigade updated: {brigade.name} by {current_user.email}")
    return jsonify(brigade.to_dict(include_leader=True, include_students=True))

@brigades_bp.route('/<brigade_id>', methods=['DELETE'])
@admin_required
def delete_brigade(brigade_id):
    """Soft delete a brigade without active students."""
    brigade = BrigadeService.delete_brigade(brigade_id)
    current_app.logger.info(f"Brigade deleted: {brigade.name} by {current_user.email}")
    return success_response("Brigade deleted successfully")
