"""Shared fixtures: an in-memory app plus a small brigade/event world."""
from datetime import date, datetime, time, timedelta

import pytest

from brigade_attendance import create_app, db
from brigade_attendance.models.brigade import Brigade
from brigade_attendance.models.event import Event, EventDay
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.services.auth_service import AuthService

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

def make_user(email, role, password='password123', first_name='Test', last_name='User',
              is_active=True):
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=is_active
    )
    user.set_password(password)
    return user.save()

@pytest.fixture
def admin_user(app):
    return make_user('admin@example.com', UserRole.ADMIN, first_name='Ada', last_name='Admin')

@pytest.fixture
def lead_user(app):
    return make_user('lead@example.com', UserRole.BRIGADE_LEAD, first_name='Lee', last_name='Lead')

@pytest.fixture
def other_lead(app):
    return make_user('other.lead@example.com', UserRole.BRIGADE_LEAD, first_name='Olga')

@pytest.fixture
def brigade(lead_user):
    return Brigade(name='Alpha', leader_id=lead_user.id).save()

@pytest.fixture
def other_brigade(other_lead):
    return Brigade(name='Bravo', leader_id=other_lead.id).save()

@pytest.fixture
def student_user(app):
    return make_user('s1@example.com', UserRole.STUDENT, password='student123',
                     first_name='Sam', last_name='Student')

@pytest.fixture
def student(brigade, student_user):
    """Student in ``brigade`` with a login account."""
    return Student(
        temp_roll_number='T001',
        first_name='Sam',
        last_name='Student',
        email='s1@example.com',
        brigade_id=brigade.id,
        user_id=student_user.id
    ).save()

@pytest.fixture
def classmate(brigade):
    return Student(
        temp_roll_number='T002',
        first_name='Cara',
        last_name='Classmate',
        brigade_id=brigade.id
    ).save()

@pytest.fixture
def outsider(other_brigade):
    """Student in a brigade the lead does not lead."""
    return Student(
        temp_roll_number='T900',
        first_name='Oscar',
        last_name='Outsider',
        brigade_id=other_brigade.id
    ).save()

@pytest.fixture
def event(app):
    """Event running today; forenoon open, afternoon disabled."""
    today = date.today()
    event = Event(
        name='Orientation',
        start_date=datetime.combine(today - timedelta(days=1), time.min),
        end_date=datetime.combine(today + timedelta(days=1), time.max)
    )
    event.event_days = [
        EventDay(date=today - timedelta(days=1)),
        EventDay(date=today, fn_enabled=True, an_enabled=False),
        EventDay(date=today + timedelta(days=1)),
    ]
    return event.save()

@pytest.fixture
def event_day(event):
    return event.day_for(date.today())

def headers_for(user):
    return {'Authorization': f'Bearer {AuthService.issue_token(user)}'}

@pytest.fixture
def admin_headers(admin_user):
    return headers_for(admin_user)

@pytest.fixture
def lead_headers(lead_user):
    return headers_for(lead_user)

@pytest.fixture
def student_headers(student):
    return headers_for(student.user)
