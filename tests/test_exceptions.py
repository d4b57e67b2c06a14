"""Tests for the exception hierarchy and the JSON error responses."""

from __future__ import annotations

import socket

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from newsapi.core.exceptions import (
    AppException,
    DatabaseUnavailableError,
    NotFoundError,
)


class TestAppException:
    def test_defaults_come_from_class(self):
        exc = NotFoundError()
        assert exc.status_code == 404
        assert exc.to_dict() == {
            "error": "NOT_FOUND",
            "message": "Resource not found",
            "status": 404,
        }

    def test_details_only_included_when_present(self):
        exc = NotFoundError(message="Article not found", details={"id": 3})
        assert exc.to_dict()["details"] == {"id": 3}

    def test_overrides(self):
        exc = AppException(message="nope", error_code="X", status_code=418)
        assert (exc.message, exc.error_code, exc.status_code) == ("nope", "X", 418)
        assert str(exc) == "nope"

    def test_subclass_status_codes(self):
        assert DatabaseUnavailableError().status_code == 503


class TestErrorResponses:
    def test_unknown_route_returns_json_404(self, client: TestClient):
        response = client.get("/nope")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["error"] == "NOT_FOUND"
        assert data["status"] == 404

    def test_wrong_method_returns_405(self, client: TestClient):
        response = client.patch("/articles/1", json={})
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.json()["error"] == "METHOD_NOT_ALLOWED"

    def test_database_error_returns_503(self, client: TestClient, article_repo):
        article_repo.error = OperationalError("SELECT 1", {}, Exception("connection refused"))
        response = client.get("/articles")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error"] == "DATABASE_UNAVAILABLE"

    def test_refused_connection_returns_503(self, client: TestClient, article_repo):
        article_repo.error = ConnectionRefusedError(111, "Connection refused")
        response = client.get("/articles/1")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    @pytest.mark.parametrize(
        "error",
        [
            socket.gaierror(-2, "Name or service not known"),
            TimeoutError(),
        ],
        ids=["dns-failure", "connect-timeout"],
    )
    def test_unreachable_host_returns_503(self, client: TestClient, article_repo, error):
        article_repo.error = error
        response = client.get("/articles")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error"] == "DATABASE_UNAVAILABLE"

    def test_unexpected_error_returns_generic_500(self, client: TestClient, article_repo):
        article_repo.error = RuntimeError("secret internals")
        response = client.get("/articles")
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["error"] == "INTERNAL_ERROR"
        assert "secret internals" not in data["message"]

    def test_error_responses_carry_request_id(self, client: TestClient, article_repo):
        response = client.get("/articles/5", headers={"X-Request-ID": "abc-123"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.headers["X-Request-ID"] == "abc-123"
