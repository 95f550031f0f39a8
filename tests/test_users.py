"""Test user management endpoints."""
import json

def new_user(**overrides):
    payload = {
        'email': 'new.lead@example.com',
        'password': 'secret1',
        'firstName': 'Nora',
        'lastName': 'Lead',
        'role': 'BRIGADE_LEAD'
    }
    payload.update(overrides)
    return payload

def test_create_user(client, admin_headers):
    response = client.post('/api/users', headers=admin_headers, json=new_user())

    assert response.status_code == 201
    data = json.loads(response.data)
    assert data['role'] == 'BRIGADE_LEAD'
    assert 'passwordHash' not in data

def test_create_user_validation(client, admin_headers, lead_user):
    response = client.post('/api/users', headers=admin_headers, json=new_user(role=None))
    assert json.loads(response.data)['error'] == 'All fields are required'

    response = client.post('/api/users', headers=admin_headers, json=new_user(password='123'))
    assert json.loads(response.data)['error'] == 'Password must be at least 6 characters'

    response = client.post('/api/users', headers=admin_headers, json=new_user(password=12345678))
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == 'Password must be a string'

    response = client.post('/api/users', headers=admin_headers, json=new_user(role='ROOT'))
    assert json.loads(response.data)['error'] == 'Invalid role'

    response = client.post('/api/users', headers=admin_headers,
                           json=new_user(email='lead@example.com'))
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == 'User with this email already exists'

def test_create_user_requires_admin(client, lead_headers):
    response = client.post('/api/users', headers=lead_headers, json=new_user())
    assert response.status_code == 403

def test_list_users(client, admin_headers, lead_user, other_lead, student_user):
    data = json.loads(client.get('/api/users', headers=admin_headers).data)
    assert data['pagination']['totalItems'] == 4

    leads = json.loads(client.get('/api/users?role=BRIGADE_LEAD', headers=admin_headers).data)
    assert sorted(u['email'] for u in leads['users']) == [
        'lead@example.com', 'other.lead@example.com'
    ]

    found = json.loads(client.get('/api/users?search=olga', headers=admin_headers).data)
    assert [u['email'] for u in found['users']] == ['other.lead@example.com']

def test_change_password(client, lead_user, lead_headers):
    response = client.put('/api/users/change-password', headers=lead_headers, json={
        'currentPassword': 'wrong-one', 'newPassword': 'brandnew'
    })
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == 'Current password is incorrect'

    response = client.put('/api/users/change-password', headers=lead_headers, json={
        'currentPassword': 'password123', 'newPassword': 'brandnew'
    })
    assert response.status_code == 200
    assert lead_user.check_password('brandnew')

def test_change_password_validation(client, lead_headers):
    response = client.put('/api/users/change-password', headers=lead_headers, json={
        'currentPassword': 'password123'
    })
    assert response.status_code == 400

    response = client.put('/api/users/change-password', headers=lead_headers, json={
        'currentPassword': 'password123', 'newPassword': 'short'
    })
    assert json.loads(response.data)['error'] == 'New password must be at least 6 characters'

    response = client.put('/api/users/change-password', headers=lead_headers, json={
        'currentPassword': 12345678, 'newPassword': 'brandnew'
    })
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == \
        'Current password and new password are required'
