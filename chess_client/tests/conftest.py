from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from chess_client import server
from chess_client.authority import AuthorityClient
from chess_client.config import Settings
from chess_client.models import GameMode
from chess_client.server import app


def get_test_client() -> TestClient:
    return TestClient(app)


def asgi_authority() -> AuthorityClient:
    """Authority client wired straight into the reference server, no sockets involved."""
    settings = Settings(authority_url="http://testserver", timeout=5.0)
    return AuthorityClient(settings, transport=httpx.ASGITransport(app=app))


@pytest.fixture(autouse=True)
def fresh_authority_game() -> Iterator[None]:
    """The reference server keeps one module-level game; start every test from scratch."""
    server.game.reset()
    server.game.mode = GameMode.PVP
    yield
    server.game.reset()
    server.game.mode = GameMode.PVP
