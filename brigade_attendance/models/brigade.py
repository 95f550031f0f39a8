"""Brigade model: a named group of students with one leader."""
from brigade_attendance import db
from brigade_attendance.models.base import BaseModel

class Brigade(BaseModel):
    """Brigade led by a BRIGADE_LEAD user."""

    __tablename__ = 'brigades'

    name = db.Column(db.String(100), unique=True, nullable=False)
    leader_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    leader = db.relationship('User', back_populates='led_brigades')
    students = db.relationship('Student', back_populates='brigade', lazy='select')

    @property
    def active_students(self) -> list:
        return sorted(
            (s for s in self.students if s.is_active),
            key=lambda s: s.temp_roll_number
        )

    def to_dict(self, include_leader: bool = False, include_students: bool = False,
                student_detail: bool = False) -> dict:
        """Convert to dictionary, optionally with leader and active students."""
        data = super().to_dict()
        if include_leader:
            data['leader'] = self.leader.summary() if self.leader else None
        if include_students:
            students = self.active_students
            if student_detail:
                data['students'] = [s.to_dict(include_user=True) for s in students]
            else:
                data['students'] = [
                    {
                        'id': s.id,
                        'tempRollNumber': s.temp_roll_number,
                        'firstName': s.first_name,
                        'lastName': s.last_name
                    }
                    for s in students
                ]
            data['_count'] = {'students': len(students)}
        return data

    def __repr__(self) -> str:
        return f'<Brigade {self.name}>'
