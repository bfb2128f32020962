"""
API Tests for broadcast notifications and read receipts
"""
import pytest


@pytest.fixture
def broadcast(client, admin_headers):
    def _broadcast(title='Mess closed', message='The mess is closed on Sunday evening.', type_='warning'):
        response = client.post(
            '/api/admin/notifications',
            json={'title': title, 'message': message, 'type': type_},
            headers=admin_headers,
        )
        assert response.status_code == 201
        return response.json()['data']

    return _broadcast


class TestBroadcast:
    """Test admin broadcasts"""

    def test_broadcast(self, client, admin, broadcast, admin_headers):
        notification = broadcast(type_='urgent')

        assert notification['type'] == 'urgent'
        assert notification['targetAudience'] == 'all'
        assert notification['isActive'] is True
        assert notification['createdBy'] == admin['id']
        listed = client.get('/api/admin/notifications', headers=admin_headers).json()['data']
        assert [n['id'] for n in listed] == [notification['id']]

    def test_type_defaults_to_info(self, client, admin_headers):
        response = client.post(
            '/api/admin/notifications', json={'title': 'Hello', 'message': 'Welcome'}, headers=admin_headers
        )
        assert response.json()['data']['type'] == 'info'

    def test_invalid_broadcasts(self, client, admin_headers):
        for payload in ({'title': '', 'message': 'x'}, {'title': 'x', 'message': 'x', 'type': 'spam'}):
            response = client.post('/api/admin/notifications', json=payload, headers=admin_headers)
            assert response.status_code == 400

    def test_students_cannot_broadcast(self, client, student_headers):
        response = client.post(
            '/api/admin/notifications', json={'title': 'x', 'message': 'y'}, headers=student_headers
        )
        assert response.status_code == 403


class TestReadReceipts:
    """Test read flags and unread counts per student"""

    def test_read_flags_are_per_student(self, client, broadcast, student_headers, other_student_headers):
        first = broadcast(title='First')
        second = broadcast(title='Second')

        marked = client.put(f"/api/student/notifications/{first['id']}/read", headers=student_headers)
        assert marked.status_code == 200

        mine = {n['id']: n['isRead'] for n in client.get('/api/student/notifications', headers=student_headers).json()['data']}
        theirs = client.get('/api/student/notifications', headers=other_student_headers).json()['data']

        assert mine == {first['id']: True, second['id']: False}
        assert all(n['isRead'] is False for n in theirs)

    def test_marking_twice_is_idempotent(self, client, broadcast, student_headers):
        notification = broadcast()
        path = f"/api/student/notifications/{notification['id']}/read"

        assert client.put(path, headers=student_headers).status_code == 200
        assert client.put(path, headers=student_headers).status_code == 200

        counts = client.get('/api/student/notifications/unread-count', headers=student_headers).json()['data']
        assert counts == {'total': 1, 'read': 1, 'unread': 0}

    def test_unread_count_ignores_deleted_notifications(self, client, broadcast, student_headers, admin_headers):
        kept = broadcast(title='Kept')
        removed = broadcast(title='Removed')
        broadcast(title='Unread')
        client.put(f"/api/student/notifications/{kept['id']}/read", headers=student_headers)
        client.put(f"/api/student/notifications/{removed['id']}/read", headers=student_headers)

        deleted = client.delete(f"/api/admin/notifications/{removed['id']}", headers=admin_headers)
        counts = client.get('/api/student/notifications/unread-count', headers=student_headers).json()['data']

        assert deleted.status_code == 200
        assert counts == {'total': 2, 'read': 1, 'unread': 1}

    def test_unknown_notification(self, client, student_headers, admin_headers):
        assert client.put('/api/student/notifications/missing/read', headers=student_headers).status_code == 404
        assert client.delete('/api/admin/notifications/missing', headers=admin_headers).status_code == 404

    def test_no_notifications(self, client, student_headers):
        counts = client.get('/api/student/notifications/unread-count', headers=student_headers).json()['data']
        assert counts == {'total': 0, 'read': 0, 'unread': 0}
