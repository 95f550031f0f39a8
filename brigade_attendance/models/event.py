"""Event model with per-day FN/AN session settings."""
from datetime import date
from brigade_attendance import db
from brigade_attendance.models.base import BaseModel

DEFAULT_SESSION_TIMES = {
    'fn_start_time': '09:00',
    'fn_end_time': '09:30',
    'an_start_time': '14:00',
    'an_end_time': '14:30',
}

class Event(BaseModel):
    """A multi-day happening during which attendance is taken."""

    __tablename__ = 'events'

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    event_days = db.relationship(
        'EventDay', back_populates='event', order_by='EventDay.date',
        cascade='all, delete-orphan'
    )

    def day_for(self, day: date):
        """The event day falling on ``day``, if any."""
        for event_day in self.event_days:
            if event_day.date == day:
                return event_day
        return None

    def to_dict(self, include_days: bool = True) -> dict:
        data = super().to_dict()
        if include_days:
            data['eventDays'] = [day.to_dict() for day in self.event_days]
        return data

    def __repr__(self) -> str:
        return f'<Event {self.name}>'

class EventDay(BaseModel):
    """One day of an event; each session can be enabled independently."""

    __tablename__ = 'event_days'

    event_id = db.Column(db.String(36), db.ForeignKey('events.id'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False)

    # Forenoon / afternoon sessions
    fn_enabled = db.Column(db.Boolean, default=True, nullable=False)
    an_enabled = db.Column(db.Boolean, default=True, nullable=False)
    fn_start_time = db.Column(db.String(5), default=DEFAULT_SESSION_TIMES['fn_start_time'])
    fn_end_time = db.Column(db.String(5), default=DEFAULT_SESSION_TIMES['fn_end_time'])
    an_start_time = db.Column(db.String(5), default=DEFAULT_SESSION_TIMES['an_start_time'])
    an_end_time = db.Column(db.String(5), default=DEFAULT_SESSION_TIMES['an_end_time'])

    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    event = db.relationship('Event', back_populates='event_days')
    attendance_records = db.relationship(
        'AttendanceRecord', back_populates='event_day', lazy='dynamic'
    )

    def to_dict(self, include_event: bool = False) -> dict:
        data = super().to_dict()
        if include_event:
            data['event'] = self.event.to_dict(include_days=False) if self.event else None
        return data

    def __repr__(self) -> str:
        return f'<EventDay {self.date}>'
