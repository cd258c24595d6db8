import copy

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resume_builder.app.core.config import Settings, get_settings
from resume_builder.app.database.database import create_db_engine
from resume_builder.app.main import create_app
from resume_builder.app.storage import DatabaseStorage, MemStorage

VALID_RESUME_CONTENT = {
    "personalInfo": {
        "fullName": "Alice Example",
        "email": "alice@example.com",
        "phone": "555-0100",
        "location": "Portland, OR",
    },
    "summary": "Backend engineer with a focus on data pipelines.",
    "experience": [
        {
            "title": "Software Engineer",
            "company": "Acme Corp",
            "location": "Remote",
            "startDate": "2020-01",
            "endDate": "Present",
            "description": "Built and ran ingestion services.",
        },
    ],
    "education": [
        {
            "degree": "BSc Computer Science",
            "school": "State University",
            "location": "Eugene, OR",
            "graduationDate": "2019-06",
        },
    ],
    "skills": ["Python", "SQL"],
}


@pytest.fixture
def resume_content() -> dict:
    """A fresh copy of a valid ResumeContent payload."""
    return copy.deepcopy(VALID_RESUME_CONTENT)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    get_settings.cache_clear()
    return Settings(
        _env_file=None,
        **{
            "STORAGE_BACKEND": "memory",
            "SECRET_KEY": "test-secret-key",
            "ALGORITHM": "HS256",
            "ACCESS_TOKEN_EXPIRE_MINUTES": 30,
            "OPENAI_API_KEY": "test-openai-key",
        },
    )


@pytest.fixture
def mem_storage() -> MemStorage:
    """Fixture to provide an empty in-memory storage."""
    return MemStorage()


@pytest.fixture
def db_storage():
    """Fixture to provide a database storage backed by in-memory SQLite."""
    storage = DatabaseStorage(create_db_engine("sqlite://"), create_all=True)
    yield storage
    storage.close()


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Every storage implementation, one test run per backend."""
    if request.param == "memory":
        yield MemStorage()
        return
    db = DatabaseStorage(create_db_engine("sqlite://"), create_all=True)
    yield db
    db.close()


@pytest.fixture
def app(mem_storage: MemStorage, settings: Settings) -> FastAPI:
    """Fixture to create a new app for each test."""
    _app = create_app(storage=mem_storage, settings=settings)
    yield _app
    _app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Fixture to create a test client for each test."""
    with TestClient(app) as c:
        yield c


def register(client: TestClient, username: str = "alice", password: str = "pw1"):
    """Register a user through the API; the client keeps the session cookie."""
    response = client.post(
        "/api/register",
        json={"username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    """A test client with a registered, logged-in user "alice"."""
    register(client)
    return client


@pytest.fixture
def register_user():
    """The `register` helper, for tests that need more than one user."""
    return register
