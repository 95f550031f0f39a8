"""Test notification endpoints."""
import json

from brigade_attendance.models.notification import Notification, UserNotification
from conftest import make_user
from brigade_attendance.models.user import UserRole

def create(client, headers, **body):
    payload = {'title': 'Heads up', 'message': 'Assembly at nine'}
    payload.update(body)
    return client.post('/api/notifications', json=payload, headers=headers)

def test_global_notification_reaches_active_users(client, admin_headers, admin_user,
                                                   lead_user, student):
    make_user('inactive@example.com', UserRole.BRIGADE_LEAD, is_active=False)

    response = create(client, admin_headers, isGlobal=True)

    assert response.status_code == 201
    data = json.loads(response.data)
    assert data['type'] == 'INFO'
    assert data['createdBy'] == admin_user.id
    assert UserNotification.query.count() == 3

def test_role_targeted_notification(client, admin_headers, lead_user, other_lead, student):
    create(client, admin_headers, targetRole='BRIGADE_LEAD', type='WARNING')

    recipients = {row.user_id for row in UserNotification.query.all()}
    assert recipients == {lead_user.id, other_lead.id}

def test_untargeted_notification_has_no_recipients(client, admin_headers, lead_user):
    response = create(client, admin_headers)

    assert response.status_code == 201
    assert Notification.query.count() == 1
    assert UserNotification.query.count() == 0

def test_create_validation(client, admin_headers, lead_headers):
    response = client.post('/api/notifications', json={'title': 'x'}, headers=admin_headers)
    assert json.loads(response.data)['error'] == 'Title and message are required'

    response = create(client, admin_headers, type='LOUD')
    assert response.status_code == 400

    response = create(client, lead_headers)
    assert response.status_code == 403

def test_is_global_must_be_boolean(client, admin_headers, lead_user):
    response = create(client, admin_headers, isGlobal='false')
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == 'isGlobal must be a boolean'
    assert Notification.query.count() == 0

    response = create(client, admin_headers, isGlobal=False)
    assert response.status_code == 201
    assert UserNotification.query.count() == 0

def test_inbox_and_read_state(client, admin_headers, lead_headers, lead_user):
    create(client, admin_headers, targetRole='BRIGADE_LEAD', title='First')
    create(client, admin_headers, targetRole='BRIGADE_LEAD', title='Second')

    inbox = json.loads(client.get('/api/notifications', headers=lead_headers).data)
    assert inbox['pagination']['totalItems'] == 2
    assert inbox['pagination']['itemsPerPage'] == 20
    assert {n['notification']['title'] for n in inbox['notifications']} == {'First', 'Second'}

    count = json.loads(client.get('/api/notifications/unread-count', headers=lead_headers).data)
    assert count == {'count': 2}

    delivery_id = inbox['notifications'][0]['id']
    response = client.put(f'/api/notifications/{delivery_id}/read', headers=lead_headers)
    assert response.status_code == 200
    read = json.loads(response.data)
    assert read['isRead'] is True
    assert read['readAt'] is not None

    unread = json.loads(
        client.get('/api/notifications?unreadOnly=true', headers=lead_headers).data
    )
    assert len(unread['notifications']) == 1

def test_cannot_read_someone_elses_notification(client, admin_headers, lead_user,
                                                student_headers):
    create(client, admin_headers, targetRole='BRIGADE_LEAD')
    delivery = UserNotification.query.filter_by(user_id=lead_user.id).first()

    response = client.put(f'/api/notifications/{delivery.id}/read', headers=student_headers)
    assert response.status_code == 404
