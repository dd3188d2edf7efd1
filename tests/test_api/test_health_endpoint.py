"""Tests for the health check endpoint."""

import pytest
from api.health import handler
from tests.utils.helpers import invoke_handler


@pytest.mark.unit
def test_health_get():
    response = invoke_handler(handler, "GET", "/api/health")

    assert response["status"] == 200
    assert response["json"] == {"status": "ok", "service": "listing-desk-api"}


@pytest.mark.unit
def test_health_post():
    response = invoke_handler(handler, "POST", "/api/health")

    assert response["status"] == 200
