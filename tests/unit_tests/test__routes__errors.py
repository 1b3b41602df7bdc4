import pytest
from fastapi import status
from fastapi.testclient import TestClient

from drive_files_api.config.settings import Settings
from drive_files_api.drive.latest_file import LATEST_PDF_QUERY
from drive_files_api.main import create_app
from tests.consts import LATEST_FILE_URL, TEST_ACCESS_TOKEN
from tests.fixtures.drive_fixtures import FakeDrive

AUTH_HEADERS = {"Authorization": f"Bearer {TEST_ACCESS_TOKEN}"}
SUMMARY_FIELDS = {"fileName", "modifiedTime", "link"}


class _HttpError(Exception):
    """Mimics googleapiclient.errors.HttpError closely enough for the resolver."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        super().__init__(f"<HttpError {status_code} returned \"{reason}\">")


def test_missing_authorization_header(client: TestClient, fake_drive: FakeDrive):
    response = client.get(LATEST_FILE_URL)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Access token is required"}
    assert fake_drive.tokens == []
    assert fake_drive.list_calls == []


@pytest.mark.parametrize(
    "header",
    [
        "Basic dXNlcjpwYXNz",
        "bearer lowercase-scheme",
        "Bearer",
        "Bearer ",
        TEST_ACCESS_TOKEN,
    ],
)
def test_malformed_authorization_header(client: TestClient, fake_drive: FakeDrive, header: str):
    response = client.get(LATEST_FILE_URL, headers={"Authorization": header})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    body = response.json()
    assert body["error"] == "Access token is required"
    assert "details" in body
    assert fake_drive.list_calls == []


def test_token_query_parameter_is_not_accepted(client: TestClient, fake_drive: FakeDrive):
    response = client.get(LATEST_FILE_URL, params={"token": TEST_ACCESS_TOKEN})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert fake_drive.list_calls == []


def test_no_pdf_files(client: TestClient, fake_drive: FakeDrive):
    fake_drive.set_files([])

    response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "No PDF files found"}
    assert len(fake_drive.list_calls) == 1


def test_response_without_files_key(client: TestClient, fake_drive: FakeDrive):
    fake_drive.response = {}

    response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "No PDF files found"}


def test_upstream_error(client: TestClient, fake_drive: FakeDrive):
    fake_drive.error = _HttpError(401, "Invalid Credentials")

    response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    body = response.json()
    assert body["error"] == "Failed to fetch file"
    assert "Invalid Credentials" in body["details"]
    assert not SUMMARY_FIELDS & body.keys()
    assert "stack" not in body
    # one attempt, with the fixed query
    assert fake_drive.list_calls == [LATEST_PDF_QUERY]


def test_upstream_error_while_building_service(client: TestClient, fake_drive: FakeDrive):
    fake_drive.factory_error = OSError("connection refused")

    response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Failed to fetch file", "details": "connection refused"}


@pytest.mark.parametrize("missing_field", ["name", "modifiedTime", "webViewLink"])
def test_incomplete_upstream_record(client: TestClient, fake_drive: FakeDrive, missing_field: str):
    record = {
        "id": "1a2b3c",
        "name": "report.pdf",
        "modifiedTime": "2024-03-14T12:00:00.000Z",
        "webViewLink": "https://drive.google.com/file/d/1a2b3c/view",
    }
    del record[missing_field]
    fake_drive.set_files([record])

    response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    body = response.json()
    assert body["error"] == "Failed to fetch file"
    assert missing_field in body["details"]
    assert not SUMMARY_FIELDS & body.keys()
    assert fake_drive.list_calls == [LATEST_PDF_QUERY]


def test_unknown_route_uses_error_shape(client: TestClient):
    response = client.get("/v1/files/oldest")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not Found"}


def test_unexpected_error_is_contained(settings: Settings, fake_drive: FakeDrive):
    class _ExplodingResolver:
        async def resolve(self, credential):
            raise RuntimeError("boom")

    app = create_app(settings=settings, drive_service_factory=fake_drive)
    app.state.latest_file_resolver = _ExplodingResolver()

    with TestClient(app) as client:
        response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)
        # the process keeps serving
        health = client.get("/health")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal Server Error", "details": "boom"}
    assert health.status_code == status.HTTP_200_OK


def test_unexpected_error_includes_stack_in_development(fake_drive: FakeDrive):
    settings = Settings(
        google_client_id="id",
        google_client_secret="secret",
        environment="development",
        _env_file=None,
    )

    class _ExplodingResolver:
        async def resolve(self, credential):
            raise RuntimeError("boom")

    app = create_app(settings=settings, drive_service_factory=fake_drive)
    app.state.latest_file_resolver = _ExplodingResolver()

    with TestClient(app) as client:
        response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "RuntimeError: boom" in response.json()["stack"]


def test_files_value_not_a_list(client: TestClient, fake_drive: FakeDrive):
    fake_drive.response = {"files": {"name": "report.pdf"}}

    response = client.get(LATEST_FILE_URL, headers=AUTH_HEADERS)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {
        "error": "Failed to fetch file",
        "details": "Malformed response from Google Drive",
    }
    assert fake_drive.list_calls == [LATEST_PDF_QUERY]
