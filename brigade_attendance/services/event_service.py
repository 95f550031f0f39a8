"""Event and event-day management."""
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func

from brigade_attendance import db
from brigade_attendance.models.attendance import AttendanceRecord
from brigade_attendance.models.event import DEFAULT_SESSION_TIMES, Event, EventDay
from brigade_attendance.utils.errors import BadRequestError
from brigade_attendance.utils.validators import Validator

TIME_FIELDS = {
    'fnStartTime': 'fn_start_time',
    'fnEndTime': 'fn_end_time',
    'anStartTime': 'an_start_time',
    'anEndTime': 'an_end_time',
}

FLAG_FIELDS = {
    'fnEnabled': 'fn_enabled',
    'anEnabled': 'an_enabled',
}

class EventService:
    """Service for events and their days."""

    @staticmethod
    def active_events() -> List[Event]:
        return (
            Event.query
            .filter(Event.is_active.is_(True))
            .order_by(Event.start_date.desc())
            .all()
        )

    @staticmethod
    def current_event(now: datetime = None) -> Tuple[Optional[Event], Optional[EventDay]]:
        """The active event whose date range contains ``now``, and today's day of it."""
        now = now or datetime.now()
        event = (
            Event.query
            .filter(
                Event.is_active.is_(True),
                Event.start_date <= now,
                Event.end_date >= now
            )
            .order_by(Event.start_date)
            .first()
        )
        if event is None:
            return None, None
        return event, event.day_for(now.date())

    @staticmethod
    def days_with_counts(event_id: str) -> List[Dict]:
        """Active days of an event, each with its attendance record count."""
        rows = (
            db.session.query(EventDay, func.count(AttendanceRecord.id))
            .outerjoin(AttendanceRecord, AttendanceRecord.event_day_id == EventDay.id)
            .filter(EventDay.event_id == event_id, EventDay.is_active.is_(True))
            .group_by(EventDay.id)
            .order_by(EventDay.date)
            .all()
        )

        days = []
        for event_day, count in rows:
            data = event_day.to_dict()
            data['_count'] = {'attendanceRecords': count}
            days.append(data)
        return days

    @staticmethod
    def _build_day(payload: Dict) -> EventDay:
        if not isinstance(payload, dict):
            raise BadRequestError("Each event day must be an object")

        event_day = EventDay(
            date=Validator.parse_date(payload.get('date'), 'event day date'),
            fn_enabled=payload.get('fnEnabled') is not False,
            an_enabled=payload.get('anEnabled') is not False
        )
        for key, column in TIME_FIELDS.items():
            value = payload.get(key)
            if value:
                Validator.validate_time(value, key)
            setattr(event_day, column, value or DEFAULT_SESSION_TIMES[column])
        return event_day

    @staticmethod
    def _check_range(start: datetime, end: datetime) -> None:
        if end <= start:
            raise BadRequestError("End date must be after start date")

    @staticmethod
    def create_event(data: Dict) -> Event:
        """Create an event together with its days in one transaction."""
        name = Validator.optional_str(data.get('name'))
        if not name:
            raise BadRequestError("Event name is required")

        start = Validator.parse_datetime(data.get('startDate'), 'start date')
        end = Validator.parse_datetime(data.get('endDate'), 'end date')

        day_payloads = data.get('eventDays')
        if not isinstance(day_payloads, list):
            raise BadRequestError("Event days must be an array")

        EventService._check_range(start, end)

        event = Event(
            name=name,
            description=Validator.optional_str(data.get('description')),
            start_date=start,
            end_date=end
        )
        event.event_days = [EventService._build_day(day) for day in day_payloads]

        try:
            db.session.add(event)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return event

    @staticmethod
    def update_event(event_id: str, data: Dict) -> Event:
        event = Event.get_or_404(event_id, "Event not found")

        if 'name' in data:
            name = Validator.optional_str(data['name'])
            if not name:
                raise BadRequestError("Event name cannot be empty")
            event.name = name

        if 'description' in data:
            event.description = Validator.optional_str(data['description'])

        start = event.start_date
        end = event.end_date
        if data.get('startDate'):
            start = Validator.parse_datetime(data['startDate'], 'start date')
        if data.get('endDate'):
            end = Validator.parse_datetime(data['endDate'], 'end date')
        EventService._check_range(start, end)
        event.start_date, event.end_date = start, end

        if 'isActive' in data:
            event.is_active = Validator.validate_bool(data['isActive'], 'isActive')

        db.session.commit()
        return event

    @staticmethod
    def update_day(day_id: str, data: Dict) -> EventDay:
        """Toggle sessions and adjust session windows of one event day."""
        event_day = EventDay.get_or_404(day_id, "Event day not found")

        for key, column in FLAG_FIELDS.items():
            if key in data:
                setattr(event_day, column, Validator.validate_bool(data[key], key))

        for key, column in TIME_FIELDS.items():
            if key in data:
                setattr(event_day, column, Validator.validate_time(data[key], key))

        if 'isActive' in data:
            event_day.is_active = Validator.validate_bool(data['isActive'], 'isActive')

        db.session.commit()
        return event_day

    @staticmethod
    def delete_event(event_id: str) -> Event:
        """Soft delete an event that has no attendance recorded against it."""
        event = Event.get_or_404(event_id, "Event not found")

        has_attendance = db.session.query(
            AttendanceRecord.query
            .join(EventDay, AttendanceRecord.event_day_id == EventDay.id)
            .filter(EventDay.event_id == event.id)
            .exists()
        ).scalar()
        if has_attendance:
            raise BadRequestError(
                "Cannot delete event with attendance records. "
                "Please archive the event instead."
            )

        event.soft_delete()
        return event

    @staticmethod
    def days_between(start: date, end: date) -> List[date]:
        """Calendar days from ``start`` to ``end`` inclusive."""
        return [
            date.fromordinal(ordinal)
            for ordinal in range(start.toordinal(), end.toordinal() + 1)
        ]
