"""Authentication API."""
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance import limiter
from brigade_attendance.services.auth_service import AuthService
from brigade_attendance.utils.helpers import json_body

auth_bp = Blueprint("auth", __name__)

def login_rate_limit() -> str:
    return current_app.config.get("LOGIN_RATE_LIMIT", "5 per minute")

@auth_bp.route("/login", methods=["POST"])
@limiter.limit(login_rate_limit)
def login():
    """Staff login with email and password."""
    result = AuthService.login(json_body())
    current_app.logger.info(f"User logged in: {result['user']['email']}")
    return jsonify(result)

@auth_bp.route("/student-login", methods=["POST"])
@limiter.limit(login_rate_limit)
def student_login():
    """Student login with temporary roll number and password."""
    result = AuthService.student_login(json_body())
    current_app.logger.info(f"Student logged in: {result['user']['email']}")
    return jsonify(result)

@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify(current_user.profile())
