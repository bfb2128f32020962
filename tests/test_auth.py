"""
API Tests for registration, login and token handling
"""
from datetime import datetime, timedelta, timezone

from conftest import STUDENT_PASSWORD, random_student_data


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


class TestRegistration:
    """Test student self-registration"""

    def test_register_creates_pending_account_without_token(self, client):
        payload = random_student_data()
        response = client.post('/api/auth/register', json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body['success'] is True
        assert 'pending admin approval' in body['message']
        assert 'token' not in body
        assert body['data']['email'] == payload['email']
        assert body['data']['rollNumber'] == payload['rollNumber']
        assert body['data']['isVerified'] is False
        assert body['data']['isActive'] is True
        assert body['data']['role'] == 'student'
        assert 'password' not in body['data']
        assert 'passwordHash' not in body['data']

    def test_email_is_normalized_and_unique(self, client):
        payload = random_student_data(email='Mixed.Case@SmartMess.edu')
        first = client.post('/api/auth/register', json=payload)
        assert first.status_code == 201
        assert first.json()['data']['email'] == 'mixed.case@smartmess.edu'

        duplicate = client.post('/api/auth/register', json=random_student_data(email='mixed.case@smartmess.edu'))

        assert duplicate.status_code == 400
        assert duplicate.json()['errorCode'] == 'DUPLICATE_ENTRY'

    def test_duplicate_roll_number_rejected(self, client):
        client.post('/api/auth/register', json=random_student_data(rollNumber='CS-001'))
        response = client.post('/api/auth/register', json=random_student_data(rollNumber='CS-001'))

        assert response.status_code == 400
        assert response.json()['errorCode'] == 'DUPLICATE_ENTRY'

    def test_short_password_rejected(self, client):
        response = client.post('/api/auth/register', json=random_student_data(password='12345'))

        assert response.status_code == 400
        assert response.json()['errorCode'] == 'VALIDATION_ERROR'

    def test_password_longer_than_bcrypt_limit_rejected(self, client):
        payload = random_student_data(password='p' * 100)
        response = client.post('/api/auth/register', json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body['errorCode'] == 'VALIDATION_ERROR'
        assert 'password' in body['details']['field_errors']

        # nothing was stored, so the same email can still register
        retry = client.post('/api/auth/register', json={**payload, 'password': STUDENT_PASSWORD})
        assert retry.status_code == 201

    def test_multibyte_password_counted_in_bytes(self, client):
        # 25 characters but 75 UTF-8 bytes
        response = client.post('/api/auth/register', json=random_student_data(password='€' * 25))

        assert response.status_code == 400
        assert response.json()['errorCode'] == 'VALIDATION_ERROR'

    def test_missing_and_malformed_fields_rejected(self, client):
        payload = random_student_data(email='not-an-email')
        del payload['rollNumber']

        response = client.post('/api/auth/register', json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body['success'] is False
        assert body['errorCode'] == 'VALIDATION_ERROR'
        assert body['message'].startswith('Validation failed')


class TestStudentLogin:
    """Test the approval workflow and student login"""

    def test_pending_student_cannot_login(self, client, pending_student):
        response = client.post(
            '/api/auth/login', json={'email': pending_student['email'], 'password': STUDENT_PASSWORD}
        )

        assert response.status_code == 403
        assert response.json()['errorCode'] == 'PENDING_APPROVAL'

    def test_register_verify_login(self, client, admin_headers):
        payload = random_student_data()
        student_id = client.post('/api/auth/register', json=payload).json()['data']['id']

        verified = client.put(f'/api/admin/students/{student_id}/verify', headers=admin_headers)
        assert verified.status_code == 200
        assert verified.json()['data']['isVerified'] is True

        before = datetime.now(timezone.utc)
        response = client.post('/api/auth/login', json={'email': payload['email'], 'password': payload['password']})

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['token']
        assert body['user']['id'] == student_id
        assert body['user']['role'] == 'student'
        lifetime = _parse(body['expiresAt']) - before
        assert timedelta(days=7) - timedelta(seconds=5) <= lifetime <= timedelta(days=7, seconds=5)

    def test_login_email_is_case_insensitive(self, client, verified_student):
        response = client.post(
            '/api/auth/login',
            json={'email': verified_student['email'].upper(), 'password': STUDENT_PASSWORD},
        )
        assert response.status_code == 200

    def test_password_whitespace_is_kept(self, client, student_factory):
        student = student_factory(password='  spaced pass  ')

        exact = client.post('/api/auth/login', json={'email': student['email'], 'password': '  spaced pass  '})
        stripped = client.post('/api/auth/login', json={'email': student['email'], 'password': 'spaced pass'})

        assert exact.status_code == 200
        assert stripped.status_code == 401

    def test_disabled_student_cannot_login(self, client, student_factory):
        student = student_factory(active=False)
        response = client.post('/api/auth/login', json={'email': student['email'], 'password': STUDENT_PASSWORD})

        assert response.status_code == 403
        assert response.json()['errorCode'] == 'ACCOUNT_DISABLED'

    def test_wrong_password_and_unknown_email(self, client, verified_student):
        wrong = client.post('/api/auth/login', json={'email': verified_student['email'], 'password': 'nope-nope'})
        unknown = client.post('/api/auth/login', json={'email': 'ghost@smartmess.edu', 'password': 'whatever'})

        for response in (wrong, unknown):
            assert response.status_code == 401
            assert response.json()['errorCode'] == 'INVALID_CREDENTIALS'
            assert response.json()['message'] == 'Invalid email or password'

    def test_student_credentials_do_not_open_admin_login(self, client, verified_student):
        response = client.post(
            '/api/auth/admin/login', json={'email': verified_student['email'], 'password': STUDENT_PASSWORD}
        )
        assert response.status_code == 401


class TestAdminLogin:
    def test_admin_login(self, client, admin):
        response = client.post('/api/auth/admin/login', json={'email': admin['email'], 'password': admin['password']})

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'Admin login successful'
        assert body['user']['role'] == 'admin'


class TestTokens:
    """Test bearer token resolution"""

    def test_me_for_student_and_admin(self, client, verified_student, student_headers, admin, admin_headers):
        student_me = client.get('/api/auth/me', headers=student_headers)
        admin_me = client.get('/api/auth/profile', headers=admin_headers)

        assert student_me.status_code == 200
        assert student_me.json()['data']['id'] == verified_student['id']
        assert student_me.json()['data']['role'] == 'student'
        assert admin_me.status_code == 200
        assert admin_me.json()['data']['id'] == admin['id']
        assert admin_me.json()['data']['role'] == 'admin'

    def test_missing_token(self, client):
        response = client.get('/api/auth/me')

        assert response.status_code == 401
        assert response.json()['message'] == 'No token provided'

    def test_garbage_token(self, client):
        response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not-a-token'})

        assert response.status_code == 401
        assert response.json()['errorCode'] == 'TOKEN_INVALID'

    def test_deactivation_applies_to_issued_tokens(self, client, verified_student, student_headers, admin_headers):
        client.put(f"/api/admin/students/{verified_student['id']}/toggle-status", headers=admin_headers)

        response = client.get('/api/auth/me', headers=student_headers)

        assert response.status_code == 403
        assert response.json()['errorCode'] == 'ACCOUNT_DISABLED'

    def test_deleted_account_token_rejected(self, client, verified_student, student_headers, superadmin_headers):
        client.delete(f"/api/admin/students/{verified_student['id']}", headers=superadmin_headers)

        response = client.get('/api/auth/me', headers=student_headers)

        assert response.status_code == 401

    def test_student_token_cannot_reach_admin_routes(self, client, student_headers):
        response = client.get('/api/admin/stats', headers=student_headers)

        assert response.status_code == 403
        assert response.json()['errorCode'] == 'INSUFFICIENT_PERMISSIONS'

    def test_admin_token_cannot_reach_student_routes(self, client, admin_headers):
        response = client.get('/api/student/attendance/today', headers=admin_headers)

        assert response.status_code == 403
        assert response.json()['message'] == 'Access denied. Student account required.'

    def test_logout(self, client, student_headers):
        response = client.post('/api/auth/logout', headers=student_headers)

        assert response.status_code == 200
        assert response.json()['success'] is True
