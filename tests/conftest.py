import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from app.main import create_app
from app.schemas.event import EventCreate
from app.schemas.user import UserOut
from app.services.auth_service import AuthService
from app.services.event_service import EventService

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret"


@pytest.fixture
def event_service():
    """Fresh, empty event store for each test"""
    return EventService()


@pytest.fixture
def auth_service():
    return AuthService(admin_email=ADMIN_EMAIL, admin_password=ADMIN_PASSWORD)


@pytest.fixture
def admin_user():
    return UserOut(id="admin-1", email=ADMIN_EMAIL, name="Admin", isAdmin=True)


@pytest.fixture
def user1():
    return UserOut(id="user-1", email="john@example.com", name="John")


@pytest.fixture
def user2():
    return UserOut(id="user-2", email="jane@example.com", name="Jane")


@pytest.fixture
def jazz_night_data():
    return EventCreate(
        title="Jazz Night",
        description="An evening of live jazz",
        imageUrl="/placeholder.svg",
        date=datetime(2024, 8, 10, 20, 0),
        city="Kazan",
        category="Concert",
    )


@pytest.fixture
def jazz_night(event_service, admin_user, jazz_night_data):
    return event_service.create_event(jazz_night_data, admin_user)


@pytest.fixture
def client(event_service, auth_service):
    """Test client around a fresh app wired to the test services"""
    app = create_app(event_service=event_service, auth_service=auth_service)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(auth_service):
    session = auth_service.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    return {"Authorization": f"Bearer {session.token}"}


@pytest.fixture
def user_headers(auth_service):
    session = auth_service.login("john@example.com", "password")
    return {"Authorization": f"Bearer {session.token}"}
