"""
API Tests for complaints and their status workflow
"""
import pytest


def complaint_payload(**overrides):
    payload = {
        'category': 'hygiene',
        'subject': 'Dirty plates',
        'description': 'Plates at the lunch counter were not washed properly.',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def complaint(client, student_headers):
    response = client.post('/api/complaints', json=complaint_payload(), headers=student_headers)
    assert response.status_code == 201
    return response.json()['data']


class TestSubmitComplaint:
    """Test complaint submission by students"""

    def test_new_complaint_is_pending_with_default_priority(self, client, student_headers, verified_student):
        response = client.post(
            '/api/complaints', json=complaint_payload(status='resolved'), headers=student_headers
        )

        data = response.json()['data']
        assert response.status_code == 201
        assert data['status'] == 'pending'
        assert data['priority'] == 'medium'
        assert data['studentId'] == verified_student['id']
        assert data['resolvedAt'] is None
        assert data['adminResponse'] is None

    def test_explicit_priority(self, client, student_headers):
        response = client.post('/api/complaints', json=complaint_payload(priority='high'), headers=student_headers)
        assert response.json()['data']['priority'] == 'high'

    def test_invalid_payloads(self, client, student_headers):
        invalid = [
            complaint_payload(category='noise'),
            complaint_payload(subject='x' * 201),
            complaint_payload(description='x' * 1001),
            complaint_payload(priority='critical'),
            complaint_payload(subject='   '),
        ]
        for payload in invalid:
            response = client.post('/api/complaints', json=payload, headers=student_headers)
            assert response.status_code == 400, payload
            assert response.json()['errorCode'] == 'VALIDATION_ERROR'

    def test_student_namespace(self, client, student_headers):
        created = client.post('/api/student/complaint', json=complaint_payload(), headers=student_headers)
        listed = client.get('/api/student/complaints', headers=student_headers)

        assert created.status_code == 201
        assert [c['id'] for c in listed.json()['data']] == [created.json()['data']['id']]

    def test_admins_cannot_submit(self, client, admin_headers):
        assert client.post('/api/complaints', json=complaint_payload(), headers=admin_headers).status_code == 403


class TestComplaintOwnership:
    def test_owner_reads_complaint(self, client, student_headers, complaint):
        response = client.get(f"/api/complaints/{complaint['id']}", headers=student_headers)
        assert response.json()['data']['subject'] == 'Dirty plates'

    def test_others_get_not_found(self, client, other_student_headers, complaint):
        response = client.get(f"/api/complaints/{complaint['id']}", headers=other_student_headers)

        assert response.status_code == 404
        assert response.json()['message'] == 'Complaint not found'
        assert client.get('/api/complaints/my-complaints', headers=other_student_headers).json()['data'] == []


class TestComplaintStatus:
    """Test admin status transitions"""

    def test_resolving_then_reopening(self, client, admin, admin_headers, student_headers, complaint):
        resolved = client.put(
            f"/api/admin/complaints/{complaint['id']}",
            json={'status': 'resolved', 'adminResponse': 'Dishwasher repaired'},
            headers=admin_headers,
        ).json()['data']

        assert resolved['status'] == 'resolved'
        assert resolved['resolvedAt'] is not None
        assert resolved['resolvedAt'] == resolved['updatedAt']
        assert resolved['resolvedBy'] == admin['id']
        assert resolved['adminResponse'] == 'Dishwasher repaired'

        reopened = client.put(
            f"/api/admin/complaints/{complaint['id']}", json={'status': 'in-progress'}, headers=admin_headers
        ).json()['data']

        assert reopened['status'] == 'in-progress'
        assert reopened['resolvedAt'] is None
        assert reopened['resolvedBy'] is None
        assert reopened['adminResponse'] == 'Dishwasher repaired'

        seen = client.get(f"/api/complaints/{complaint['id']}", headers=student_headers).json()['data']
        assert seen['status'] == 'in-progress'

    def test_unknown_status_and_complaint(self, client, admin_headers, complaint):
        bad_status = client.put(
            f"/api/admin/complaints/{complaint['id']}", json={'status': 'closed'}, headers=admin_headers
        )
        missing = client.put('/api/admin/complaints/missing', json={'status': 'resolved'}, headers=admin_headers)

        assert bad_status.status_code == 400
        assert missing.status_code == 404

    def test_admin_listing_with_filter(self, client, admin_headers, student_headers, verified_student):
        first = client.post('/api/complaints', json=complaint_payload(), headers=student_headers).json()['data']
        second = client.post(
            '/api/complaints', json=complaint_payload(category='quantity'), headers=student_headers
        ).json()['data']
        client.put(f"/api/admin/complaints/{first['id']}", json={'status': 'rejected'}, headers=admin_headers)

        everything = client.get('/api/admin/complaints', headers=admin_headers).json()['data']
        pending = client.get('/api/admin/complaints', params={'status': 'pending'}, headers=admin_headers).json()['data']

        assert {c['id'] for c in everything} == {first['id'], second['id']}
        assert [c['id'] for c in pending] == [second['id']]
        assert pending[0]['student']['rollNumber'] == verified_student['roll_number']
        assert pending[0]['student']['email'] == verified_student['email']

    def test_students_cannot_change_status(self, client, student_headers, complaint):
        response = client.put(
            f"/api/admin/complaints/{complaint['id']}", json={'status': 'resolved'}, headers=student_headers
        )
        assert response.status_code == 403
