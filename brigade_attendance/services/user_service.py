"""User account management."""
from sqlalchemy import or_
from brigade_attendance import db
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.utils.errors import BadRequestError
from brigade_attendance.utils.validators import Validator

class UserService:

    @staticmethod
    def list_query(role: str = None, search: str = None):
        """Active users, newest first, optionally filtered by role and search text."""
        query = User.query.filter(User.is_active.is_(True))

        if role:
            query = query.filter(
                User.role == Validator.parse_enum(UserRole, role, "Invalid role")
            )

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
                User.email.ilike(pattern)
            ))

        return query.order_by(User.created_at.desc())

    @staticmethod
    def create_user(data: dict, commit: bool = True) -> User:
        """Create a user account. Raises ``BadRequestError`` on invalid input."""
        Validator.require(
            data, ['email', 'password', 'firstName', 'lastName', 'role'],
            "All fields are required"
        )
        Validator.validate_password(data['password'])
        role = Validator.parse_enum(UserRole, data['role'], "Invalid role")

        email = str(data['email']).strip().lower()
        if not Validator.validate_email(email):
            raise BadRequestError("Invalid email format")

        if User.query.filter_by(email=email).first():
            raise BadRequestError("User with this email already exists")

        user = User(
            email=email,
            first_name=str(data['firstName']).strip(),
            last_name=str(data['lastName']).strip(),
            role=role
        )
        user.set_password(data['password'])
        db.session.add(user)

        if commit:
            db.session.commit()
        else:
            db.session.flush()

        return user

    @staticmethod
    def change_password(user: User, data: dict) -> None:
        Validator.require_str(
            data, ['currentPassword', 'newPassword'],
            "Current password and new password are required"
        )
        Validator.validate_password(data['newPassword'], field='New password')

        if not user.check_password(data['currentPassword']):
            raise BadRequestError("Current password is incorrect")

        user.set_password(data['newPassword'])
        db.session.commit()
