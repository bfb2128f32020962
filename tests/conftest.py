"""
SmartMess - Test Configuration and Fixtures
"""
from datetime import date
from typing import Callable, Dict, Generator

import pytest
from faker import Faker
from fastapi import FastAPI
from fastapi.testclient import TestClient

from smartmess.config.settings import Settings
from smartmess.db.database import Database
from smartmess.main import create_app
from smartmess.models.enums import AdminRole
from smartmess.repositories import StudentRepository
from smartmess.schemas.menu import MenuUpsert
from smartmess.schemas.student import AdminCreate, StudentCreate
from smartmess.scripts.create_admin import create_admin
from smartmess.services import MenuService, StudentService

fake = Faker()

STUDENT_PASSWORD = 'studentpass123'
ADMIN_PASSWORD = 'adminpass123'


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory database and cheap hashing"""
    return Settings(
        DATABASE_URL='sqlite://',
        ENVIRONMENT='testing',
        JWT_SECRET_KEY='test-jwt-secret-key-for-testing',
        PASSWORD_BCRYPT_ROUNDS=4,
        LOG_LEVEL='WARNING',
        TIMEZONE='UTC',
        CORS_ORIGINS='*',
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client; entering it runs the lifespan so the schema exists"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(app: FastAPI, client: TestClient) -> Database:
    return app.state.database


def random_student_data(**overrides) -> Dict[str, str]:
    data = {
        'name': fake.name(),
        'email': f'{fake.unique.user_name()}@smartmess.edu',
        'password': STUDENT_PASSWORD,
        'rollNumber': f'R{fake.unique.random_int(10000, 99999)}',
        'hostelName': f'Block {fake.random_uppercase_letter()}',
        'roomNumber': str(fake.random_int(100, 499)),
        'phoneNumber': fake.numerify('98########'),
    }
    data.update(overrides)
    return data


@pytest.fixture
def student_factory(app: FastAPI, database: Database, settings: Settings) -> Callable[..., Dict]:
    """Create students directly in the database; verified and active by default"""

    def _create(verified: bool = True, active: bool = True, **overrides) -> Dict:
        data = random_student_data(**overrides)
        with database.session() as db:
            service = StudentService(db, settings, app.state.password_hasher)
            student = service.create(StudentCreate(**data))
            if verified or not active:
                StudentRepository(db).update(student, {'is_verified': verified, 'is_active': active})
            return {'id': student.id, 'email': student.email, 'password': data['password'], 'name': student.name,
                    'roll_number': student.roll_number}

    return _create


def login(client: TestClient, email: str, password: str, admin: bool = False) -> Dict[str, str]:
    path = '/api/auth/admin/login' if admin else '/api/auth/login'
    response = client.post(path, json={'email': email, 'password': password})
    assert response.status_code == 200, response.text
    return {'Authorization': f"Bearer {response.json()['token']}"}


@pytest.fixture
def verified_student(student_factory) -> Dict:
    return student_factory()


@pytest.fixture
def pending_student(student_factory) -> Dict:
    return student_factory(verified=False)


@pytest.fixture
def student_headers(client: TestClient, verified_student: Dict) -> Dict[str, str]:
    return login(client, verified_student['email'], verified_student['password'])


@pytest.fixture
def other_student_headers(client: TestClient, student_factory) -> Dict[str, str]:
    other = student_factory()
    return login(client, other['email'], other['password'])


def _make_admin(database: Database, settings: Settings, role: AdminRole) -> Dict:
    data = AdminCreate(
        name=fake.name(),
        email=f'{role.value}.{fake.unique.user_name()}@smartmess.edu',
        password=ADMIN_PASSWORD,
        role=role,
    )
    admin = create_admin(database, settings, data)
    return {'id': admin.id, 'email': admin.email, 'password': ADMIN_PASSWORD, 'role': role.value}


@pytest.fixture
def admin(database: Database, settings: Settings) -> Dict:
    return _make_admin(database, settings, AdminRole.ADMIN)


@pytest.fixture
def superadmin(database: Database, settings: Settings) -> Dict:
    return _make_admin(database, settings, AdminRole.SUPERADMIN)


@pytest.fixture
def admin_headers(client: TestClient, admin: Dict) -> Dict[str, str]:
    return login(client, admin['email'], admin['password'], admin=True)


@pytest.fixture
def superadmin_headers(client: TestClient, superadmin: Dict) -> Dict[str, str]:
    return login(client, superadmin['email'], superadmin['password'], admin=True)


@pytest.fixture
def menu_factory(database: Database, settings: Settings) -> Callable[..., Dict]:
    """Create or replace the menu of a date"""

    def _create(menu_date: date, **items) -> Dict:
        payload = {
            'date': menu_date,
            'breakfast': ['Poha', 'Tea'],
            'lunch': ['Rice', 'Dal', 'Roti'],
            'snacks': ['Samosa'],
            'dinner': ['Paneer', 'Roti'],
        }
        payload.update(items)
        with database.session() as db:
            menu, _ = MenuService(db, settings).upsert(MenuUpsert(**payload))
            return {'id': menu.id, 'date': menu.menu_date}

    return _create
