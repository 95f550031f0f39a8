"""User model for authentication and authorization."""
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash
from brigade_attendance import db
from brigade_attendance.models.base import BaseModel

class UserRole(Enum):
    """User roles enumeration."""
    ADMIN = 'ADMIN'
    BRIGADE_LEAD = 'BRIGADE_LEAD'
    STUDENT = 'STUDENT'

class User(BaseModel):
    """User model for all system users."""

    __tablename__ = 'users'

    # Basic Information
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=True)

    # Role and status
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.STUDENT)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime, nullable=True)

    # Relationships
    led_brigades = db.relationship(
        'Brigade', back_populates='leader', lazy='select',
        order_by='Brigade.name'
    )

    def set_password(self, password: str) -> None:
        """Set user password with hashing."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Check if provided password matches user's password."""
        return check_password_hash(self.password_hash, password)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def summary(self) -> dict:
        """Short form used when a user is embedded in another resource."""
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email
        }

    def to_dict(self, exclude: list = None) -> dict:
        """Convert to dictionary excluding sensitive data."""
        default_exclude = ['password_hash']
        exclude = (exclude or []) + default_exclude

        return super().to_dict(exclude=exclude)

    def profile(self) -> dict:
        """User with student profile and led brigades, as returned by auth endpoints."""
        data = self.to_dict()
        student = self.student
        data['student'] = student.to_dict(include_brigade=True) if student else None
        data['brigades'] = [
            brigade.to_dict() for brigade in self.led_brigades if brigade.is_active
        ]
        return data

    def __repr__(self) -> str:
        return f'<User {self.email}>'
