import pytest
from fastapi.testclient import TestClient

from string_analyzer.database import build_engine
from string_analyzer.main import create_app
from string_analyzer.repository import Repository
from string_analyzer.service import StringAnalyzerService


@pytest.fixture
def repository() -> Repository:
    """A repository on its own in-memory database."""
    repo = Repository(build_engine("sqlite://"))
    yield repo
    repo.engine.dispose()


@pytest.fixture
def service(repository: Repository) -> StringAnalyzerService:
    return StringAnalyzerService(repository)


@pytest.fixture
def client(service: StringAnalyzerService) -> TestClient:
    with TestClient(create_app(service)) as test_client:
        yield test_client
