"""Student management service."""
from typing import Dict, Optional
from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import joinedload
from brigade_attendance import db
from brigade_attendance.models.attendance import AttendanceRecord
from brigade_attendance.models.event import EventDay
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.services.access_scope import resolve_scope
from brigade_attendance.services.user_service import UserService
from brigade_attendance.utils.errors import BadRequestError, ForbiddenError, NotFoundError
from brigade_attendance.utils.validators import Validator

# camelCase body key -> column
UPDATABLE_FIELDS = {
    'firstName': 'first_name',
    'lastName': 'last_name',
    'email': 'email',
    'phone': 'phone',
}

class StudentService:
    """Service for managing students."""

    @staticmethod
    def list_query(viewer: User, search: str = None, brigade_id: str = None):
        """Active students visible to ``viewer``, newest first."""
        query = Student.query.filter(
            Student.is_active.is_(True),
            resolve_scope(viewer).student_filter()
        )

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Student.first_name.ilike(pattern),
                Student.last_name.ilike(pattern),
                Student.temp_roll_number.ilike(pattern),
                Student.email.ilike(pattern)
            ))

        if brigade_id:
            query = query.filter(Student.brigade_id == brigade_id)

        return query.options(
            joinedload(Student.brigade), joinedload(Student.user)
        ).order_by(Student.created_at.desc())

    @staticmethod
    def get_visible(viewer: User, student_id: str) -> Student:
        """Load a student, 404 if missing and 403 if outside the viewer's scope."""
        student = Student.get_or_404(student_id, "Student not found")
        if not resolve_scope(viewer).can_access_student(student):
            raise ForbiddenError("Access denied")
        return student

    @staticmethod
    def detail(student: Student) -> Dict:
        """Student with brigade, account and full attendance history."""
        records = (
            student.attendance_records
            .options(joinedload(AttendanceRecord.event_day).joinedload(EventDay.event))
            .order_by(AttendanceRecord.created_at.desc())
            .all()
        )
        data = student.to_dict(include_brigade=True, include_user=True)
        data['attendanceRecords'] = [r.to_dict(include_event_day=True) for r in records]
        return data

    @staticmethod
    def _check_roll_number(roll_number: str, exclude_id: Optional[str] = None) -> None:
        query = Student.query.filter(Student.temp_roll_number == roll_number)
        if exclude_id:
            query = query.filter(Student.id != exclude_id)
        if query.first():
            raise BadRequestError("Student with this roll number already exists")

    @staticmethod
    def create_student(creator: User, data: Dict) -> Student:
        """Create a student, optionally with a STUDENT login account.

        The account gets the configured default password and the student is
        linked to it in the same transaction.
        """
        Validator.require(
            data, ['tempRollNumber', 'firstName', 'lastName'],
            "Roll number, first name, and last name are required"
        )
        roll_number = str(data['tempRollNumber']).strip()
        StudentService._check_roll_number(roll_number)

        brigade_id = Validator.optional_str(data.get('brigadeId'))
        if brigade_id and not resolve_scope(creator).can_manage_brigade_id(brigade_id):
            raise ForbiddenError("Access denied to this brigade")

        email = Validator.optional_str(data.get('email'))
        student = Student(
            temp_roll_number=roll_number,
            first_name=str(data['firstName']).strip(),
            last_name=str(data['lastName']).strip(),
            email=email,
            phone=Validator.optional_str(data.get('phone')),
            brigade_id=brigade_id
        )

        try:
            if data.get('createUserAccount') and email:
                account = UserService.create_user({
                    'email': email,
                    'password': current_app.config['STUDENT_DEFAULT_PASSWORD'],
                    'firstName': student.first_name,
                    'lastName': student.last_name,
                    'role': UserRole.STUDENT.value
                }, commit=False)
                student.user_id = account.id

            db.session.add(student)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return student

    @staticmethod
    def update_student(editor: User, student_id: str, data: Dict) -> Student:
        student = Student.get_or_404(student_id, "Student not found")
        scope = resolve_scope(editor)

        if not scope.can_access_student(student):
            raise ForbiddenError("Access denied")

        # Validate everything before touching the row
        changes = {}
        if 'tempRollNumber' in data:
            roll_number = Validator.optional_str(data['tempRollNumber'])
            if not roll_number:
                raise BadRequestError("Roll number cannot be empty")
            StudentService._check_roll_number(roll_number, exclude_id=student.id)
            changes['temp_roll_number'] = roll_number

        if 'brigadeId' in data:
            brigade_id = Validator.optional_str(data['brigadeId'])
            if not scope.can_manage_brigade_id(brigade_id):
                raise ForbiddenError("Access denied to this brigade")
            changes['brigade_id'] = brigade_id

        for key, column in UPDATABLE_FIELDS.items():
            if key in data:
                value = Validator.optional_str(data[key])
                if value is None and column in ('first_name', 'last_name'):
                    raise BadRequestError(f"{key} cannot be empty")
                changes[column] = value

        if 'isActive' in data:
            changes['is_active'] = Validator.validate_bool(data['isActive'], 'isActive')

        return student.update(**changes)

    @staticmethod
    def delete_student(student_id: str) -> None:
        student = db.session.get(Student, student_id)
        if student is None:
            raise NotFoundError("Student not found")
        student.soft_delete()
