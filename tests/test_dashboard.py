"""Test dashboard statistics."""
import json
from datetime import datetime, timedelta

import pytest

from brigade_attendance import db
from brigade_attendance.models.attendance import (
    AttendanceRecord,
    AttendanceSession,
    AttendanceStatus,
)
from brigade_attendance.services.dashboard_service import attendance_percentage
from conftest import headers_for, make_user
from brigade_attendance.models.user import UserRole

@pytest.mark.parametrize('present, total, expected', [
    (0, 0, 0),
    (5, 0, 0),
    (1, 3, 33.33),
    (2, 3, 66.67),
    (4, 4, 100.0),
])
def test_attendance_percentage(present, total, expected):
    assert attendance_percentage(present, total) == expected

def add_record(student, event_day, session=AttendanceSession.FN,
               status=AttendanceStatus.PRESENT, created_at=None):
    record = AttendanceRecord(
        student_id=student.id,
        event_day_id=event_day.id,
        session=session,
        status=status
    )
    if created_at is not None:
        record.created_at = created_at
    db.session.add(record)
    db.session.commit()
    return record

def test_admin_dashboard_empty(client, admin_headers):
    response = client.get('/api/analytics/dashboard', headers=admin_headers)

    assert response.status_code == 200
    stats = json.loads(response.data)['admin']
    assert stats['totalStudents'] == 0
    assert stats['todayAttendance'] == 0
    assert stats['overallAttendancePercentage'] == 0
    assert stats['currentEvent'] is None

def test_admin_dashboard(client, admin_headers, lead_user, other_lead, student, outsider,
                         event, event_day):
    add_record(student, event_day)
    add_record(outsider, event_day, status=AttendanceStatus.ABSENT)
    add_record(student, event.event_days[0],
               created_at=datetime.now() - timedelta(days=1))

    stats = json.loads(
        client.get('/api/analytics/dashboard', headers=admin_headers).data
    )['admin']

    assert stats['totalStudents'] == 2
    assert stats['totalBrigades'] == 2
    assert stats['totalBrigadeLeads'] == 2
    assert stats['todayAttendance'] == 1
    assert stats['overallAttendancePercentage'] == 66.67
    assert stats['currentEvent'] == {'name': 'Orientation', 'totalDays': 3}

def test_brigade_lead_dashboard(client, lead_headers, student, classmate, outsider, event_day):
    add_record(student, event_day)
    add_record(classmate, event_day, status=AttendanceStatus.LATE)
    add_record(outsider, event_day)

    stats = json.loads(
        client.get('/api/analytics/dashboard', headers=lead_headers).data
    )['brigadeLead']

    assert stats['totalBrigades'] == 1
    assert stats['totalStudents'] == 2
    assert stats['todayAttendance'] == 1
    assert stats['brigadeAttendancePercentage'] == 50.0
    assert stats['brigades'][0]['name'] == 'Alpha'
    assert stats['brigades'][0]['studentCount'] == 2

def test_student_dashboard(client, student_headers, student, event, event_day):
    add_record(student, event_day, session=AttendanceSession.FN)
    add_record(student, event.event_days[0], status=AttendanceStatus.ABSENT)

    stats = json.loads(
        client.get('/api/analytics/dashboard', headers=student_headers).data
    )['student']

    assert stats['studentInfo'] == {
        'tempRollNumber': 'T001',
        'name': 'Sam Student',
        'brigade': 'Alpha'
    }
    assert stats['totalSessions'] == 2
    assert stats['presentSessions'] == 1
    assert stats['attendancePercentage'] == 50.0
    assert stats['todaySessions'] == 1
    assert stats['todayPresent'] == 1

def test_student_without_profile(client, app):
    user = make_user('loose@example.com', UserRole.STUDENT)

    response = client.get('/api/analytics/dashboard', headers=headers_for(user))
    assert response.status_code == 200
    assert json.loads(response.data) == {}
