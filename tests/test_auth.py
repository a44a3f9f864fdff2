"""
API token checks.
"""

import pytest


PROTECTED_ROUTES = [
    ("get", "/shows"),
    ("get", "/actors"),
    ("post", "/init"),
    ("get", "/admin/database-dump"),
    ("get", "/jobs/unknown"),
]


@pytest.mark.parametrize("method, path", PROTECTED_ROUTES)
def test_missing_token_rejected(secured_client, method, path):
    response = getattr(secured_client, method)(path)

    assert response.status_code == 401
    assert response.json() == {"error": "unauthorized", "message": "Missing or invalid API token"}


def test_wrong_token_rejected(secured_client):
    response = secured_client.get("/shows", headers={"x-api-token": "guess"})

    assert response.status_code == 401


def test_correct_token_accepted(secured_client):
    response = secured_client.get("/shows", headers={"x-api-token": "s3cret"})

    assert response.status_code == 200


@pytest.mark.parametrize("path", ["/", "/health", "/deployment-version", "/api/openapi.json"])
def test_public_routes(secured_client, path):
    assert secured_client.get(path).status_code == 200


def test_open_access_without_configured_token(api_client):
    assert api_client.get("/shows").status_code == 200
