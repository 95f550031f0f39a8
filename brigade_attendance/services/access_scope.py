"""Role-based visibility rules.

Every handler asks :func:`resolve_scope` for the acting user's scope and uses
its predicates and checks instead of branching on the role itself:

* ``ADMIN`` sees and manages everything.
* ``BRIGADE_LEAD`` is limited to the brigades they lead, the students of
  those brigades and those students' attendance. Leadership is read from the
  database on every request, never from the token.
* ``STUDENT`` is limited to their own student row, its attendance and the
  brigade they belong to.

Lookups that miss return 404 before a scope check runs; a record that exists
but fails the check is a 403.
"""
from typing import List, Optional

from sqlalchemy import false, true

from brigade_attendance import db
from brigade_attendance.models.attendance import AttendanceRecord
from brigade_attendance.models.brigade import Brigade
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User, UserRole


class AccessScope:
    """Unrestricted scope; subclasses narrow it."""

    def __init__(self, user: User):
        self.user = user

    def brigade_filter(self):
        return true()

    def student_filter(self):
        return true()

    def attendance_filter(self):
        return true()

    def can_access_brigade(self, brigade: Brigade) -> bool:
        return True

    def can_access_student(self, student: Student) -> bool:
        return True

    def can_manage_brigade_id(self, brigade_id: Optional[str]) -> bool:
        """Whether the user may place students into ``brigade_id``."""
        return True


class AdminScope(AccessScope):
    pass


class BrigadeLeadScope(AccessScope):

    def __init__(self, user: User):
        super().__init__(user)
        self._brigade_ids = None

    @property
    def brigade_ids(self) -> List[str]:
        if self._brigade_ids is None:
            self._brigade_ids = list(db.session.execute(
                db.select(Brigade.id).where(Brigade.leader_id == self.user.id)
            ).scalars())
        return self._brigade_ids

    def brigade_filter(self):
        return Brigade.leader_id == self.user.id

    def student_filter(self):
        return Student.brigade_id.in_(self.brigade_ids)

    def attendance_filter(self):
        return AttendanceRecord.student_id.in_(
            db.select(Student.id).where(Student.brigade_id.in_(self.brigade_ids))
        )

    def can_access_brigade(self, brigade: Brigade) -> bool:
        return brigade.leader_id == self.user.id

    def can_access_student(self, student: Student) -> bool:
        return student.brigade_id is not None and student.brigade_id in self.brigade_ids

    def can_manage_brigade_id(self, brigade_id: Optional[str]) -> bool:
        return brigade_id is not None and brigade_id in self.brigade_ids


class StudentScope(AccessScope):

    def __init__(self, user: User):
        super().__init__(user)
        self.student = db.session.execute(
            db.select(Student).where(Student.user_id == user.id)
        ).scalar_one_or_none()

    def brigade_filter(self):
        if self.student is None or self.student.brigade_id is None:
            return false()
        return Brigade.id == self.student.brigade_id

    def student_filter(self):
        return Student.user_id == self.user.id

    def attendance_filter(self):
        if self.student is None:
            return false()
        return AttendanceRecord.student_id == self.student.id

    def can_access_brigade(self, brigade: Brigade) -> bool:
        return self.student is not None and brigade.id == self.student.brigade_id

    def can_access_student(self, student: Student) -> bool:
        return student.user_id is not None and student.user_id == self.user.id

    def can_manage_brigade_id(self, brigade_id: Optional[str]) -> bool:
        return False


SCOPES = {
    UserRole.ADMIN: AdminScope,
    UserRole.BRIGADE_LEAD: BrigadeLeadScope,
    UserRole.STUDENT: StudentScope,
}


def resolve_scope(user: User) -> AccessScope:
    """Map the acting user to the scope for their role."""
    return SCOPES[user.role](user)
