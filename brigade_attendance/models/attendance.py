"""Attendance model, one row per student, event day and session."""
from datetime import datetime
from enum import Enum
from brigade_attendance import db
from brigade_attendance.models.base import BaseModel

class AttendanceSession(Enum):
    """Attendance-taking windows of an event day."""
    FN = 'FN'  # forenoon
    AN = 'AN'  # afternoon

class AttendanceStatus(Enum):
    PRESENT = 'PRESENT'
    ABSENT = 'ABSENT'
    LATE = 'LATE'

class AttendanceRecord(BaseModel):
    """Attendance record model."""

    __tablename__ = 'attendance_records'

    student_id = db.Column(db.String(36), db.ForeignKey('students.id'), nullable=False, index=True)
    event_day_id = db.Column(db.String(36), db.ForeignKey('event_days.id'), nullable=False, index=True)
    session = db.Column(db.Enum(AttendanceSession), nullable=False)
    status = db.Column(db.Enum(AttendanceStatus), nullable=False, default=AttendanceStatus.PRESENT)

    marked_by = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)
    marked_at = db.Column(db.DateTime, default=datetime.now, nullable=False)

    # Relationships
    student = db.relationship('Student', back_populates='attendance_records')
    event_day = db.relationship('EventDay', back_populates='attendance_records')

    __table_args__ = (
        db.UniqueConstraint(
            'student_id', 'event_day_id', 'session',
            name='uq_attendance_student_day_session'
        ),
    )

    def to_dict(self, include_student: bool = False, include_event_day: bool = False) -> dict:
        data = super().to_dict()
        if include_student:
            data['student'] = self.student.to_dict(include_brigade=True)
        if include_event_day:
            data['eventDay'] = self.event_day.to_dict(include_event=True)
        return data

    def __repr__(self):
        return f'<AttendanceRecord {self.student_id}-{self.event_day_id}-{self.session.value}>'
