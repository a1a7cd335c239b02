# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from typing import Generator

from core.custom_roles import get_custom_role_store
from core.permission_helpers import requires_permission
from dependencies.auth import requires_role
from dependencies.station_guards import (
    get_station_access_context,
    get_station_creation_context,
    require_station_access,
    require_station_creation,
)
from models import StationAccessContext, StationAccessTarget


GUARD_STATIONS = {
    "S1": {"id": "S1", "code": "CP-001", "name": "Kampala Central", "orgId": "org-1", "type": "CHARGING", "ownerId": "owner-1"},
    "S2": {"id": "S2", "code": "SW-002", "name": "Entebbe Swap", "orgId": "org-2", "type": "SWAP", "ownerId": "owner-2"},
}


def create_guard_app() -> FastAPI:
    """Minimal host application wired to the access guards."""
    app = FastAPI()
    app.state.test_user = None
    app.state.test_profile = None

    # Stands in for the host's auth middleware
    @app.middleware("http")
    async def inject_user(request: Request, call_next):
        request.state.user = app.state.test_user
        request.state.profile = app.state.test_profile
        return await call_next(request)

    @app.get("/stations/{station_id}")
    def read_station(station_id: str, ctx: StationAccessContext = Depends(get_station_access_context)):
        station = GUARD_STATIONS.get(station_id)
        require_station_access(ctx, station)
        return station

    @app.post("/stations/new/{kind}")
    def create_station(kind: str, ctx=Depends(get_station_creation_context)):
        require_station_creation(ctx, kind)
        return {"created": kind.upper()}

    @app.get("/approvals", dependencies=[Depends(requires_permission("approvals"))])
    def list_approvals():
        return {"data": []}

    @app.get("/team", dependencies=[Depends(requires_role(["STATION_OWNER", "STATION_ADMIN"]))])
    def list_team():
        return {"data": []}

    return app


@pytest.fixture(scope="function")
def app() -> FastAPI:
    """Create a test FastAPI application instance."""
    return create_guard_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the guard application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(app):
    """Place a session user (and optional /me profile) on every request."""
    def _login(user=None, profile=None):
        app.state.test_user = user
        app.state.test_profile = profile
    return _login


@pytest.fixture
def make_ctx():
    """Build a StationAccessContext from keyword arguments."""
    def _make(**kwargs):
        return StationAccessContext(**kwargs)
    return _make


@pytest.fixture
def make_station():
    """Build a StationAccessTarget with sensible defaults."""
    def _make(**kwargs):
        data = {"id": "ST-100", "code": "CODE-100", "type": "CHARGE"}
        data.update(kwargs)
        return StationAccessTarget(**data)
    return _make


@pytest.fixture(autouse=True)
def reset_custom_roles():
    """Reset the process-wide custom role store before each test."""
    store = get_custom_role_store()
    store.clear()
    yield
    store.clear()
