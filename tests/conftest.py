import pytest
from fastapi.testclient import TestClient

from drive_files_api.config.settings import Settings
from drive_files_api.main import create_app
from tests.consts import TEST_CLIENT_ID, TEST_CLIENT_SECRET, TEST_REDIRECT_URI

pytest_plugins = [
    "tests.fixtures.drive_fixtures",
]

CONFIG_ENV_VARS = [
    "CLIENT_ID",
    "CLIENT_SECRET",
    "REDIRECT_URI",
    "BASE_URL",
    "ENVIRONMENT",
    "NODE_ENV",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
    "DRIVE_REQUEST_TIMEOUT_SECONDS",
    "OAUTH_REQUEST_TIMEOUT_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep the developer's shell and any local .env file out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_client_id=TEST_CLIENT_ID,
        google_client_secret=TEST_CLIENT_SECRET,
        google_redirect_uri=TEST_REDIRECT_URI,
        _env_file=None,
    )


@pytest.fixture
def client(settings: Settings, fake_drive) -> TestClient:
    app = create_app(settings=settings, drive_service_factory=fake_drive)
    with TestClient(app) as client:
        yield client
