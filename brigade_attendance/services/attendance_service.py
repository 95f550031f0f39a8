"""Attendance marking and listing."""
from datetime import datetime
from typing import Dict, List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import joinedload

from brigade_attendance import db
from brigade_attendance.models.attendance import (
    AttendanceRecord,
    AttendanceSession,
    AttendanceStatus,
)
from brigade_attendance.models.event import EventDay
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User
from brigade_attendance.services.access_scope import resolve_scope
from brigade_attendance.utils.errors import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
)
from brigade_attendance.utils.validators import Validator

UPSERT_DIALECTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}

SESSION_LABELS = {
    AttendanceSession.FN: 'Forenoon',
    AttendanceSession.AN: 'Afternoon',
}

class AttendanceService:
    """Service for marking and reading attendance."""

    @staticmethod
    def parse_session(value) -> AttendanceSession:
        return Validator.parse_enum(AttendanceSession, value, "Invalid session")

    @staticmethod
    def parse_status(value) -> AttendanceStatus:
        return Validator.parse_enum(AttendanceStatus, value, "Invalid status")

    @staticmethod
    def get_active_event_day(event_day_id: str, session: AttendanceSession) -> EventDay:
        """Load the event day and check that ``session`` is open on it."""
        event_day = db.session.get(EventDay, event_day_id)
        if event_day is None or not event_day.is_active:
            raise NotFoundError("Event day not found or inactive")

        enabled = {
            AttendanceSession.FN: event_day.fn_enabled,
            AttendanceSession.AN: event_day.an_enabled,
        }[session]
        if not enabled:
            raise BadRequestError(
                f"{SESSION_LABELS[session]} session is not enabled for this day"
            )
        return event_day

    @staticmethod
    def _upsert(rows: List[Dict]) -> None:
        """Insert rows, overwriting status/markedBy/markedAt on the composite key."""
        dialect = db.session.get_bind().dialect.name
        insert = UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Attendance upsert is not supported on {dialect}")

        for row in rows:
            stmt = insert(AttendanceRecord).values(**row)
            stmt = stmt.on_conflict_do_update(
                index_elements=['student_id', 'event_day_id', 'session'],
                set_={
                    'status': stmt.excluded.status,
                    'marked_by': stmt.excluded.marked_by,
                    'marked_at': stmt.excluded.marked_at,
                    'updated_at': stmt.excluded.updated_at,
                }
            )
            db.session.execute(stmt)

    @staticmethod
    def _load_records(student_ids: List[str], event_day_id: str,
                      session: AttendanceSession) -> List[AttendanceRecord]:
        return (
            AttendanceRecord.query
            .populate_existing()
            .options(
                joinedload(AttendanceRecord.student).joinedload(Student.brigade),
                joinedload(AttendanceRecord.event_day).joinedload(EventDay.event),
            )
            .filter(
                AttendanceRecord.student_id.in_(student_ids),
                AttendanceRecord.event_day_id == event_day_id,
                AttendanceRecord.session == session,
            )
            .all()
        )

    @staticmethod
    def _row(student_id: str, event_day_id: str, session: AttendanceSession,
             status: AttendanceStatus, marker: User, now: datetime) -> Dict:
        return {
            'student_id': student_id,
            'event_day_id': event_day_id,
            'session': session,
            'status': status,
            'marked_by': marker.id,
            'marked_at': now,
            'created_at': now,
            'updated_at': now,
        }

    @staticmethod
    def mark(marker: User, data: Dict) -> AttendanceRecord:
        """Mark one student for one session of an event day.

        Checks run in a fixed order and the first failure is raised; nothing
        is written until all of them pass.
        """
        Validator.require_str(
            data, ['studentId', 'eventDayId', 'session'],
            "Student ID, event day ID, and session are required"
        )
        session = AttendanceService.parse_session(data['session'])
        status = AttendanceService.parse_status(data.get('status') or 'PRESENT')

        student = db.session.get(Student, data['studentId'])
        if student is None or not student.is_active:
            raise NotFoundError("Student not found")

        if not resolve_scope(marker).can_access_student(student):
            raise ForbiddenError("Access denied to this student")

        event_day = AttendanceService.get_active_event_day(data['eventDayId'], session)

        try:
            AttendanceService._upsert([
                AttendanceService._row(
                    student.id, event_day.id, session, status, marker, datetime.now()
                )
            ])
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return AttendanceService._load_records([student.id], event_day.id, session)[0]

    @staticmethod
    def bulk_mark(marker: User, data: Dict) -> List[AttendanceRecord]:
        """Mark many students at once; the whole batch succeeds or nothing is written."""
        student_ids = data.get('studentIds')
        if (not isinstance(student_ids, list) or not student_ids
                or not all(isinstance(sid, str) for sid in student_ids)
                or Validator.missing_fields(data, ['eventDayId', 'session'])):
            raise BadRequestError(
                "Student IDs array, event day ID, and session are required"
            )
        session = AttendanceService.parse_session(data['session'])
        status = AttendanceService.parse_status(data.get('status') or 'PRESENT')

        student_ids = list(dict.fromkeys(student_ids))
        students = Student.query.filter(
            Student.id.in_(student_ids),
            Student.is_active.is_(True)
        ).all()
        if len(students) != len(student_ids):
            raise BadRequestError("Some students not found")

        scope = resolve_scope(marker)
        if any(not scope.can_access_student(student) for student in students):
            raise ForbiddenError("Access denied to some students")

        event_day = AttendanceService.get_active_event_day(data['eventDayId'], session)

        now = datetime.now()
        rows = [
            AttendanceService._row(sid, event_day.id, session, status, marker, now)
            for sid in student_ids
        ]
        try:
            AttendanceService._upsert(rows)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        records = AttendanceService._load_records(student_ids, event_day.id, session)
        order = {sid: index for index, sid in enumerate(student_ids)}
        return sorted(records, key=lambda record: order[record.student_id])

    @staticmethod
    def list_query(viewer: User, filters: Dict):
        """Attendance visible to ``viewer``, narrowed by the query-string filters."""
        query = AttendanceRecord.query.filter(resolve_scope(viewer).attendance_filter())

        if filters.get('eventDayId'):
            query = query.filter(AttendanceRecord.event_day_id == filters['eventDayId'])
        if filters.get('session'):
            query = query.filter(
                AttendanceRecord.session == AttendanceService.parse_session(filters['session'])
            )
        if filters.get('status'):
            query = query.filter(
                AttendanceRecord.status == AttendanceService.parse_status(filters['status'])
            )
        if filters.get('brigadeId') and viewer.is_admin():
            query = query.filter(
                AttendanceRecord.student.has(Student.brigade_id == filters['brigadeId'])
            )

        return query.options(
            joinedload(AttendanceRecord.student).joinedload(Student.brigade),
            joinedload(AttendanceRecord.event_day).joinedload(EventDay.event),
        ).order_by(AttendanceRecord.created_at.desc())
