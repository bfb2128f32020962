"""
Unit Tests for password hashing and token signing
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from smartmess.core.exceptions import InvalidTokenError
from smartmess.core.security import JWTManager, PasswordHasher
from smartmess.models.enums import PrincipalKind

SECRET = 'unit-test-signing-key-with-enough-length'
OTHER_SECRET = 'another-unit-test-signing-key-of-length'


class TestPasswordHasher:
    """Test bcrypt hashing"""

    def test_hash_and_verify(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash('s3cret-pass')

        assert hashed != 's3cret-pass'
        assert hashed.startswith('$2')
        assert hasher.verify('s3cret-pass', hashed)
        assert not hasher.verify('wrong-pass', hashed)

    def test_hashes_are_salted(self):
        hasher = PasswordHasher(rounds=4)
        assert hasher.hash('same') != hasher.hash('same')

    def test_rounds_must_be_in_range(self):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=3)
        with pytest.raises(ValueError):
            PasswordHasher(rounds=32)

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=4).hash('')

    def test_password_over_72_bytes_rejected(self):
        hasher = PasswordHasher(rounds=4)
        assert hasher.verify('p' * 72, hasher.hash('p' * 72))
        with pytest.raises(ValueError, match='72 bytes'):
            hasher.hash('p' * 73)

    def test_verify_tolerates_garbage_hash(self):
        hasher = PasswordHasher(rounds=4)
        assert hasher.verify('anything', 'not-a-bcrypt-hash') is False
        assert hasher.verify('', 'whatever') is False


class TestJWTManager:
    """Test token issue and verification"""

    def test_issue_and_verify_round_trip(self):
        manager = JWTManager(secret_key=SECRET, expire_days=7)
        issued = manager.issue_token('student-1', PrincipalKind.STUDENT, 'a@smartmess.edu')

        claims = manager.verify_token(issued.token)

        assert claims.principal_id == 'student-1'
        assert claims.email == 'a@smartmess.edu'
        assert claims.kind == PrincipalKind.STUDENT
        assert claims.expires_at == issued.expires_at

    def test_expiry_is_seven_days_out(self):
        manager = JWTManager(secret_key=SECRET)
        before = datetime.now(timezone.utc)
        issued = manager.issue_token('admin-1', PrincipalKind.ADMIN, 'b@smartmess.edu')

        delta = issued.expires_at - before
        assert timedelta(days=7) - timedelta(seconds=5) <= delta <= timedelta(days=7, seconds=5)

    def test_expired_token_rejected(self):
        manager = JWTManager(secret_key=SECRET)
        issued = manager.issue_token(
            'student-1', PrincipalKind.STUDENT, 'a@smartmess.edu', expires_delta=timedelta(seconds=-10)
        )

        with pytest.raises(InvalidTokenError, match='expired'):
            manager.verify_token(issued.token)

    def test_tampered_token_rejected(self):
        manager = JWTManager(secret_key=SECRET)
        token = manager.issue_token('student-1', PrincipalKind.STUDENT, 'a@smartmess.edu').token
        header, payload, signature = token.split('.')
        tampered = '.'.join([header, payload, signature[::-1]])

        with pytest.raises(InvalidTokenError):
            manager.verify_token(tampered)

    def test_token_from_other_secret_rejected(self):
        issued = JWTManager(secret_key=SECRET).issue_token('x', PrincipalKind.ADMIN, 'x@smartmess.edu')

        with pytest.raises(InvalidTokenError):
            JWTManager(secret_key=OTHER_SECRET).verify_token(issued.token)

    def test_unknown_kind_rejected(self):
        token = jwt.encode(
            {'sub': 'x', 'kind': 'janitor', 'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
            SECRET,
            algorithm='HS256',
        )

        with pytest.raises(InvalidTokenError):
            JWTManager(secret_key=SECRET).verify_token(token)

    def test_malformed_and_empty_tokens_rejected(self):
        manager = JWTManager(secret_key=SECRET)
        for token in ('', 'not.a.jwt', 'garbage'):
            with pytest.raises(InvalidTokenError):
                manager.verify_token(token)
