"""Dashboard statistics, computed from the attendance rows on every call."""
from datetime import date
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from brigade_attendance import db
from brigade_attendance.models.attendance import AttendanceRecord, AttendanceStatus
from brigade_attendance.models.brigade import Brigade
from brigade_attendance.models.event import Event, EventDay
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.services.access_scope import resolve_scope
from brigade_attendance.utils.helpers import day_bounds

def attendance_percentage(present: int, total: int) -> float:
    """Share of PRESENT records as a percentage rounded to 2 places; 0 without records."""
    if not total:
        return 0
    return round(present / total * 100, 2)

class DashboardService:
    """Builds the role-keyed dashboard payload."""

    @staticmethod
    def build(user: User) -> Dict:
        builders = {
            UserRole.ADMIN: ('admin', DashboardService.admin_stats),
            UserRole.BRIGADE_LEAD: ('brigadeLead', DashboardService.brigade_lead_stats),
            UserRole.STUDENT: ('student', DashboardService.student_stats),
        }
        key, builder = builders[user.role]
        stats = builder(user)
        return {key: stats} if stats is not None else {}

    @staticmethod
    def _count_attendance(*criteria) -> int:
        return db.session.scalar(
            db.select(func.count(AttendanceRecord.id)).where(*criteria)
        )

    @staticmethod
    def _today_present(*criteria) -> int:
        start, end = day_bounds()
        return DashboardService._count_attendance(
            AttendanceRecord.status == AttendanceStatus.PRESENT,
            AttendanceRecord.created_at >= start,
            AttendanceRecord.created_at <= end,
            *criteria
        )

    @staticmethod
    def admin_stats(user: User) -> Dict:
        total_students = Student.query.filter(Student.is_active.is_(True)).count()
        total_brigades = Brigade.query.filter(Brigade.is_active.is_(True)).count()
        total_leads = User.query.filter(
            User.role == UserRole.BRIGADE_LEAD, User.is_active.is_(True)
        ).count()

        total_records = DashboardService._count_attendance()
        present_records = DashboardService._count_attendance(
            AttendanceRecord.status == AttendanceStatus.PRESENT
        )

        current_event = (
            Event.query
            .filter(Event.is_active.is_(True))
            .order_by(Event.start_date.desc())
            .first()
        )

        return {
            'totalStudents': total_students,
            'totalBrigades': total_brigades,
            'totalBrigadeLeads': total_leads,
            'todayAttendance': DashboardService._today_present(),
            'overallAttendancePercentage': attendance_percentage(present_records, total_records),
            'currentEvent': {
                'name': current_event.name,
                'totalDays': len(current_event.event_days)
            } if current_event else None
        }

    @staticmethod
    def brigade_lead_stats(user: User) -> Dict:
        scope = resolve_scope(user)
        brigades: List[Brigade] = (
            Brigade.query
            .filter(scope.brigade_filter())
            .options(joinedload(Brigade.students))
            .order_by(Brigade.name)
            .all()
        )
        student_ids = [s.id for b in brigades for s in b.students if s.is_active]
        in_brigades = AttendanceRecord.student_id.in_(student_ids)

        total_records = DashboardService._count_attendance(in_brigades)
        present_records = DashboardService._count_attendance(
            in_brigades, AttendanceRecord.status == AttendanceStatus.PRESENT
        )

        return {
            'totalBrigades': len(brigades),
            'totalStudents': len(student_ids),
            'todayAttendance': DashboardService._today_present(in_brigades),
            'brigadeAttendancePercentage': attendance_percentage(present_records, total_records),
            'brigades': [
                {
                    'id': b.id,
                    'name': b.name,
                    'studentCount': len(b.active_students)
                }
                for b in brigades
            ]
        }

    @staticmethod
    def student_stats(user: User):
        """Stats for the student's own record; ``None`` without a student profile."""
        student = Student.query.filter_by(user_id=user.id).first()
        if student is None:
            return None

        rows = (
            db.session.query(AttendanceRecord.status, EventDay.date)
            .join(EventDay, AttendanceRecord.event_day_id == EventDay.id)
            .filter(AttendanceRecord.student_id == student.id)
            .all()
        )
        today = date.today()
        present = [row for row in rows if row.status == AttendanceStatus.PRESENT]
        today_rows = [row for row in rows if row.date == today]

        return {
            'studentInfo': {
                'tempRollNumber': student.temp_roll_number,
                'name': student.full_name,
                'brigade': student.brigade.name if student.brigade else 'No Brigade'
            },
            'attendancePercentage': attendance_percentage(len(present), len(rows)),
            'totalSessions': len(rows),
            'presentSessions': len(present),
            'todaySessions': len(today_rows),
            'todayPresent': sum(1 for row in today_rows if row.status == AttendanceStatus.PRESENT)
        }
