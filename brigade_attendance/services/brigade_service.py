"""Brigade management service."""
from typing import Dict, List, Optional

from sqlalchemy.orm import joinedload

from brigade_attendance import db
from brigade_attendance.models.brigade import Brigade
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.services.access_scope import resolve_scope
from brigade_attendance.utils.errors import BadRequestError, ForbiddenError
from brigade_attendance.utils.validators import Validator

class BrigadeService:

    @staticmethod
    def visible_brigades(viewer: User) -> List[Brigade]:
        """Active brigades in the viewer's scope, sorted by name."""
        return (
            Brigade.query
            .filter(Brigade.is_active.is_(True), resolve_scope(viewer).brigade_filter())
            .options(joinedload(Brigade.leader), joinedload(Brigade.students))
            .order_by(Brigade.name)
            .all()
        )

    @staticmethod
    def get_visible(viewer: User, brigade_id: str) -> Brigade:
        brigade = Brigade.get_or_404(brigade_id, "Brigade not found")
        if not resolve_scope(viewer).can_access_brigade(brigade):
            raise ForbiddenError("Access denied")
        return brigade

    @staticmethod
    def _validate_leader(leader_id: Optional[str]) -> None:
        if not leader_id:
            return
        leader = User.query.filter_by(
            id=leader_id, role=UserRole.BRIGADE_LEAD, is_active=True
        ).first()
        if leader is None:
            raise BadRequestError("Invalid brigade leader")

    @staticmethod
    def _check_name(name: str, exclude_id: str = None) -> None:
        query = Brigade.query.filter(Brigade.name == name)
        if exclude_id:
            query = query.filter(Brigade.id != exclude_id)
        if query.first():
            raise BadRequestError("Brigade with this name already exists")

    @staticmethod
    def create_brigade(data: Dict) -> Brigade:
        name = Validator.optional_str(data.get('name'))
        if not name:
            raise BadRequestError("Brigade name is required")
        BrigadeService._check_name(name)

        leader_id = Validator.optional_str(data.get('leaderId'))
        BrigadeService._validate_leader(leader_id)

        return Brigade(name=name, leader_id=leader_id).save()

    @staticmethod
    def update_brigade(brigade_id: str, data: Dict) -> Brigade:
        """Rename a brigade or change its leader; ``leaderId: null`` clears the leader."""
        brigade = Brigade.get_or_404(brigade_id, "Brigade not found")

        name = Validator.optional_str(data.get('name'))
        if name and name != brigade.name:
            BrigadeService._check_name(name, exclude_id=brigade.id)
            brigade.name = name

        if 'leaderId' in data:
            leader_id = Validator.optional_str(data['leaderId'])
            BrigadeService._validate_leader(leader_id)
            brigade.leader_id = leader_id

        db.session.commit()
        return brigade

    @staticmethod
    def delete_brigade(brigade_id: str) -> Brigade:
        brigade = Brigade.get_or_404(brigade_id, "Brigade not found")

        active_students = Student.query.filter(
            Student.brigade_id == brigade.id, Student.is_active.is_(True)
        ).count()
        if active_students > 0:
            raise BadRequestError(
                "Cannot delete brigade with active students. "
                "Please reassign or deactivate students first."
            )

        brigade.soft_delete()
        return brigade
