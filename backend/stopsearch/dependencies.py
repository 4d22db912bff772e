"""Shared FastAPI dependencies and the request rate limiter."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from stopsearch.services.dashboard import Dashboard
from stopsearch.services.police_client import PoliceAPIClient

limiter = Limiter(key_func=get_remote_address)


def get_dashboard(request: Request) -> Dashboard:
    """Dashboard created at startup."""
    return request.app.state.dashboard


def get_police_client(request: Request) -> PoliceAPIClient:
    return request.app.state.police_client
