"""Test authentication endpoints."""
import json

from flask_jwt_extended import create_access_token

from brigade_attendance import db
from conftest import make_user
from brigade_attendance.models.user import UserRole

def test_health_check(client):
    """Test health endpoint."""
    response = client.get('/api/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['status'] == 'OK'
    assert data['environment'] == 'testing'

def test_login_success(client, admin_user):
    """Test successful login."""
    response = client.post('/api/auth/login', json={
        'email': 'admin@example.com',
        'password': 'password123'
    })

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['token']
    assert data['user']['email'] == 'admin@example.com'
    assert data['user']['role'] == 'ADMIN'
    assert 'passwordHash' not in data['user']
    assert admin_user.last_login is not None

def test_login_requires_fields(client):
    response = client.post('/api/auth/login', json={'email': 'admin@example.com'})
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == 'Email and password are required'

def test_login_invalid_credentials(client, admin_user):
    """Test login with invalid credentials."""
    response = client.post('/api/auth/login', json={
        'email': 'admin@example.com',
        'password': 'wrongpassword'
    })

    assert response.status_code == 401
    assert json.loads(response.data)['error'] == 'Invalid credentials'

def test_login_inactive_user(client, app):
    make_user('gone@example.com', UserRole.ADMIN, is_active=False)

    response = client.post('/api/auth/login', json={
        'email': 'gone@example.com',
        'password': 'password123'
    })
    assert response.status_code == 401

def test_student_login(client, student):
    """Students log in with their roll number."""
    response = client.post('/api/auth/student-login', json={
        'tempRollNumber': 'T001',
        'password': 'student123'
    })

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['user']['student']['tempRollNumber'] == 'T001'
    assert data['user']['student']['brigade']['name'] == 'Alpha'

def test_student_login_without_account(client, classmate):
    response = client.post('/api/auth/student-login', json={
        'tempRollNumber': 'T002',
        'password': 'student123'
    })
    assert response.status_code == 401

def test_get_current_user(client, lead_user, brigade):
    """Test get current user profile."""
    login_response = client.post('/api/auth/login', json={
        'email': 'lead@example.com',
        'password': 'password123'
    })
    token = json.loads(login_response.data)['token']

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['email'] == 'lead@example.com'
    assert [b['name'] for b in data['brigades']] == ['Alpha']

def test_missing_token(client):
    response = client.get('/api/auth/me')
    assert response.status_code == 401
    assert json.loads(response.data)['error'] == 'Access token required'

def test_invalid_token(client):
    response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 403
    assert json.loads(response.data)['error'] == 'Invalid or expired token'

def test_token_for_deactivated_user(client, admin_user):
    token = create_access_token(identity=admin_user.id, additional_claims={'role': 'ADMIN'})
    admin_user.is_active = False
    db.session.commit()

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 403
    assert json.loads(response.data)['error'] == 'User not found or inactive'
