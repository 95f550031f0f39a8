"""Authentication service for staff and student logins."""
from datetime import datetime
from flask_jwt_extended import create_access_token
from brigade_attendance import db
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User
from brigade_attendance.utils.errors import UnauthorizedError
from brigade_attendance.utils.validators import Validator

class AuthService:

    @staticmethod
    def issue_token(user: User) -> str:
        """Access token carrying the user id; the role claim is informational only."""
        return create_access_token(
            identity=str(user.id),
            additional_claims={'role': user.role.value}
        )

    @staticmethod
    def _complete_login(user: User) -> dict:
        user.last_login = datetime.now()
        db.session.commit()

        return {
            "token": AuthService.issue_token(user),
            "user": user.profile()
        }

    @staticmethod
    def login(data: dict) -> dict:
        """Authenticate a user by email and password."""
        Validator.require(data, ['email', 'password'], "Email and password are required")

        email = str(data['email']).strip().lower()
        user = User.query.filter_by(email=email).first()

        if not user or not user.is_active:
            raise UnauthorizedError("Invalid credentials")

        if not user.check_password(str(data['password'])):
            raise UnauthorizedError("Invalid credentials")

        return AuthService._complete_login(user)

    @staticmethod
    def student_login(data: dict) -> dict:
        """Authenticate a student by temporary roll number and account password."""
        Validator.require(
            data, ['tempRollNumber', 'password'],
            "Roll number and password are required"
        )

        student = Student.query.filter_by(
            temp_roll_number=str(data['tempRollNumber']).strip()
        ).first()

        if not student or not student.user or not student.user.is_active:
            raise UnauthorizedError("Invalid credentials")

        if not student.user.check_password(str(data['password'])):
            raise UnauthorizedError("Invalid credentials")

        return AuthService._complete_login(student.user)
