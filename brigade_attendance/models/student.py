"""Student model identified by a temporary roll number."""
from brigade_attendance import db
from brigade_attendance.models.base import BaseModel

class Student(BaseModel):
    """Student enrolled in a brigade, optionally linked to a login account."""

    __tablename__ = 'students'

    # Identity
    temp_roll_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)

    # Contact
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(20), nullable=True)

    # Membership
    brigade_id = db.Column(db.String(36), db.ForeignKey('brigades.id'), nullable=True, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True, unique=True)

    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    brigade = db.relationship('Brigade', back_populates='students')
    user = db.relationship('User', backref=db.backref('student', uselist=False))
    attendance_records = db.relationship(
        'AttendanceRecord', back_populates='student', lazy='dynamic'
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def account_summary(self) -> dict:
        if self.user is None:
            return None
        return {
            'id': self.user.id,
            'email': self.user.email,
            'isActive': self.user.is_active,
            'lastLogin': self.user.last_login.isoformat() if self.user.last_login else None
        }

    def to_dict(self, include_brigade: bool = False, include_user: bool = False) -> dict:
        """Convert to dictionary."""
        data = super().to_dict()
        if include_brigade:
            data['brigade'] = self.brigade.to_dict() if self.brigade else None
        if include_user:
            data['user'] = self.account_summary()
        return data

    def __repr__(self) -> str:
        return f'<Student {self.temp_roll_number}>'
