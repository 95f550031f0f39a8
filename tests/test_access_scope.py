"""Test role-based visibility rules."""
from brigade_attendance import db
from brigade_attendance.models.brigade import Brigade
from brigade_attendance.models.student import Student
from brigade_attendance.services.access_scope import (
    AdminScope,
    BrigadeLeadScope,
    StudentScope,
    resolve_scope,
)

def visible_students(scope):
    return {s.temp_roll_number for s in Student.query.filter(scope.student_filter())}

def visible_brigades(scope):
    return {b.name for b in Brigade.query.filter(scope.brigade_filter())}

def test_resolve_scope_by_role(admin_user, lead_user, student):
    assert isinstance(resolve_scope(admin_user), AdminScope)
    assert isinstance(resolve_scope(lead_user), BrigadeLeadScope)
    assert isinstance(resolve_scope(student.user), StudentScope)

def test_admin_scope(admin_user, student, outsider, brigade, other_brigade):
    scope = resolve_scope(admin_user)

    assert visible_students(scope) == {'T001', 'T900'}
    assert visible_brigades(scope) == {'Alpha', 'Bravo'}
    assert scope.can_access_student(outsider)
    assert scope.can_manage_brigade_id(None)

def test_brigade_lead_scope(lead_user, student, classmate, outsider, brigade, other_brigade):
    scope = resolve_scope(lead_user)

    assert visible_students(scope) == {'T001', 'T002'}
    assert visible_brigades(scope) == {'Alpha'}
    assert scope.can_access_student(student)
    assert not scope.can_access_student(outsider)
    assert scope.can_access_brigade(brigade)
    assert not scope.can_access_brigade(other_brigade)
    assert scope.can_manage_brigade_id(brigade.id)
    assert not scope.can_manage_brigade_id(other_brigade.id)
    assert not scope.can_manage_brigade_id(None)

def test_lead_scope_reads_leadership_from_database(lead_user, other_brigade, outsider):
    assert not resolve_scope(lead_user).can_access_student(outsider)

    other_brigade.leader_id = lead_user.id
    db.session.commit()

    assert resolve_scope(lead_user).can_access_student(outsider)

def test_student_scope(student, classmate, outsider, brigade, other_brigade):
    scope = resolve_scope(student.user)

    assert visible_students(scope) == {'T001'}
    assert visible_brigades(scope) == {'Alpha'}
    assert scope.can_access_student(student)
    assert not scope.can_access_student(classmate)
    assert not scope.can_access_brigade(other_brigade)
    assert not scope.can_manage_brigade_id(brigade.id)

def test_student_scope_without_profile(student_user, student, brigade):
    student.user_id = None
    db.session.commit()

    scope = resolve_scope(student_user)
    assert visible_students(scope) == set()
    assert visible_brigades(scope) == set()
