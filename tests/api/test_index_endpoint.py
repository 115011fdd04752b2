"""
Test suite for the repository indexing endpoint.

Tests POST /repositories/index with FastAPI TestClient, both against a
mocked service and end to end over a faked GitHub API.

System role: Verification of the indexing HTTP API
"""

import base64
import json
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from repo_audit.api.deps import get_indexing_service
from repo_audit.api.routers.repositories import router
from repo_audit.application.services.indexing_service import IndexingService
from repo_audit.core.exceptions import ValidationError
from repo_audit.models.indexing import ProviderName
from repo_audit.models.streaming import StreamEvent, StreamEventType

AUTH = {"Authorization": "Bearer gh-token"}


@pytest.fixture
def app() -> FastAPI:
    """Create FastAPI test application with repositories router."""
    app = FastAPI()
    app.include_router(router)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


def parse_sse(body: str) -> list[tuple[str, dict]]:
    """Split an SSE body into (event, data) pairs."""
    events = []
    for frame in body.strip().split("\n\n"):
        lines = dict(line.split(": ", 1) for line in frame.splitlines())
        events.append((lines["event"], json.loads(lines["data"])))
    return events


class TestIndexEndpointWithMockedService:
    """Test suite for request handling against a mocked IndexingService."""

    def test_index_should_stream_service_events(self, client: TestClient) -> None:
        # Arrange
        async def stream_events(indexer):
            yield StreamEvent(event=StreamEventType.PROGRESS, data={"progress": 1.0})
            yield StreamEvent(event=StreamEventType.COMPLETE, data={"file_count": 0})

        mock_service = MagicMock(spec=IndexingService)
        mock_service.stream_events = stream_events
        client.app.dependency_overrides[get_indexing_service] = lambda: mock_service

        # Act
        response = client.post(
            "/repositories/index",
            json={"provider": "github", "repository": "acme/widgets"},
            headers=AUTH,
        )

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert parse_sse(response.text) == [
            ("progress", {"progress": 1.0}),
            ("complete", {"file_count": 0}),
        ]
        args = mock_service.create_indexer.call_args
        assert args.args[:3] == (ProviderName.GITHUB, "acme/widgets", "gh-token")

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Basic abc"}])
    def test_index_should_return_400_without_bearer_token(self, client: TestClient, headers: dict) -> None:
        client.app.dependency_overrides[get_indexing_service] = lambda: MagicMock(spec=IndexingService)

        response = client.post("/repositories/index", json={"repository": "acme/widgets"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing bearer access token"

    def test_index_should_return_400_for_invalid_repository_name(self, client: TestClient) -> None:
        mock_service = MagicMock(spec=IndexingService)
        mock_service.create_indexer.side_effect = ValidationError(
            "Invalid GitHub repository name: 'widgets'", field="repository"
        )
        client.app.dependency_overrides[get_indexing_service] = lambda: mock_service

        response = client.post("/repositories/index", json={"repository": "widgets"}, headers=AUTH)

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "repository"}


class TestIndexEndpointEndToEnd:
    """Test suite running the real service over a faked GitHub API."""

    @pytest.fixture
    def github_client(self) -> httpx.AsyncClient:
        files = {"src/app.py": b"print(1)\n", "src/broken.py": None, "config.yaml": b"debug: true\n"}

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path == "/repos/acme/widgets":
                return httpx.Response(200, json={"default_branch": "main"})
            if path == "/repos/acme/widgets/git/ref/heads/main":
                return httpx.Response(200, json={"object": {"sha": "c0ffee"}})
            if path == "/repos/acme/widgets/git/trees/c0ffee":
                tree = [{"path": p, "type": "blob"} for p in files] + [{"path": "logo.png", "type": "blob"}]
                return httpx.Response(200, json={"tree": tree})
            file_path = path.removeprefix("/repos/acme/widgets/contents/")
            if files.get(file_path) is not None:
                encoded = base64.b64encode(files[file_path]).decode()
                return httpx.Response(200, json={"encoding": "base64", "content": encoded})
            return httpx.Response(500)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    def test_index_should_stream_progress_and_complete_corpus(
        self,
        client: TestClient,
        github_client: httpx.AsyncClient,
        indexer_settings,
    ) -> None:
        # Arrange
        service = IndexingService(client=github_client, settings=indexer_settings)
        client.app.dependency_overrides[get_indexing_service] = lambda: service

        # Act
        response = client.post("/repositories/index", json={"repository": "acme/widgets"}, headers=AUTH)

        # Assert
        events = parse_sse(response.text)
        assert [name for name, _ in events] == ["progress", "complete"]
        assert events[0][1] == {"progress": 1.0}
        complete = events[-1][1]
        assert complete["branch"] == "main"
        assert complete["skipped_paths"] == ["src/broken.py"]
        assert {f["path"]: f["language"] for f in complete["files"]} == {
            "src/app.py": "python",
            "config.yaml": "yaml",
        }

    def test_index_should_stream_error_event_on_structural_failure(
        self,
        client: TestClient,
        indexer_settings,
    ) -> None:
        failing = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(401)))
        service = IndexingService(client=failing, settings=indexer_settings)
        client.app.dependency_overrides[get_indexing_service] = lambda: service

        response = client.post("/repositories/index", json={"repository": "acme/widgets"}, headers=AUTH)

        assert response.status_code == 200
        events = parse_sse(response.text)
        assert events == [
            ("error", {"code": "UPSTREAM_FETCH_FAILED", "message": "Failed to resolve default branch: HTTP 401"})
        ]
