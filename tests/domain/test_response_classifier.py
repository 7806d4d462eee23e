"""Unit tests for the ResponseClassifier domain service."""

import json

import pytest

from asaas.domain.exceptions import (
    ApiError,
    AuthenticationError,
    FailureKind,
    NotFoundError,
    RateLimitError,
    RemoteValidationError,
)
from asaas.domain.gateway.transport import RawResponse, header_value
from asaas.domain.service.response_classifier import ResponseClassifier


def _classify(status, body=b"", headers=None):
    if not isinstance(body, (bytes, str)):
        body = json.dumps(body).encode("utf-8")
    return ResponseClassifier().classify(status, headers or {}, body)


def _errors(*descriptions):
    return {"errors": [{"code": "invalid", "description": d} for d in descriptions]}


# ── Success ──────────────────────────────────────────────────────────────────


class TestSuccess:

    def test_decodes_json_object(self):
        assert _classify(200, {"id": "cus_1", "name": "João"}) == {
            "id": "cus_1",
            "name": "João",
        }

    def test_empty_body_is_empty_dict(self):
        assert _classify(204) == {}

    def test_str_body_accepted(self):
        assert _classify(201, '{"id": "pay_1"}') == {"id": "pay_1"}

    def test_non_object_body_is_an_error(self):
        result = _classify(200, [1, 2])
        assert type(result) is ApiError
        assert "Invalid response body" in result.message

    def test_json_string_body_is_an_error(self):
        result = _classify(200, b'"not json"')
        assert type(result) is ApiError
        assert "Invalid response body" in result.message

    def test_malformed_body_is_an_error(self):
        result = _classify(200, b"<html>oops</html>")
        assert isinstance(result, ApiError)
        assert result.status_code == 200


# ── Failures ─────────────────────────────────────────────────────────────────


class TestFailures:

    def test_401(self):
        result = _classify(401)
        assert isinstance(result, AuthenticationError)
        assert result.status_code == 401
        assert result.kind is FailureKind.AUTHENTICATION
        assert result.message == "Invalid API token or unauthorized access"

    def test_400_keeps_remote_errors(self):
        body = _errors("CPF inválido")
        result = _classify(400, body)
        assert isinstance(result, RemoteValidationError)
        assert result.message == "CPF inválido"
        assert result.errors == body["errors"]

    def test_400_joins_messages(self):
        result = _classify(400, _errors("Nome obrigatório", "Email inválido"))
        assert result.message == "Nome obrigatório; Email inválido"

    def test_400_falls_back_to_message_then_unknown(self):
        result = _classify(400, {"errors": [{"message": "bad"}, {"code": "x"}]})
        assert result.message == "bad; Unknown error"

    def test_400_without_body(self):
        result = _classify(400)
        assert result.message == "Invalid data provided"
        assert result.errors == []

    def test_404(self):
        result = _classify(404, _errors("Cliente não encontrado"))
        assert isinstance(result, NotFoundError)
        assert result.message == "Cliente não encontrado"

    def test_429_with_retry_after(self):
        result = _classify(429, headers={"Retry-After": "30"})
        assert isinstance(result, RateLimitError)
        assert result.retry_after == 30

    def test_429_retry_after_header_is_case_insensitive(self):
        assert _classify(429, headers={"retry-after": "5"}).retry_after == 5

    def test_429_unparseable_retry_after(self):
        assert _classify(429, headers={"Retry-After": "soon"}).retry_after is None

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors(self, status):
        result = _classify(status)
        assert type(result) is ApiError
        assert result.status_code == status
        assert "server error" in result.message

    def test_unmapped_status(self):
        result = _classify(418)
        assert type(result) is ApiError
        assert result.status_code == 418
        assert result.message == "Unexpected error occurred"

    def test_malformed_error_body_uses_default(self):
        result = _classify(404, b"not json")
        assert result.message == "Resource not found"

    def test_every_failure_is_remote(self):
        assert not _classify(500).is_local


class TestHandle:

    def test_returns_body(self):
        response = RawResponse(200, body=b'{"deleted": true}')
        assert ResponseClassifier().handle(response) == {"deleted": True}

    def test_raises_failure(self):
        with pytest.raises(NotFoundError):
            ResponseClassifier().handle(RawResponse(404))


class TestHeaderLookup:

    def test_any_case(self):
        headers = {"RETRY-AFTER": "12"}
        assert header_value(headers, "retry-after") == "12"
        assert RawResponse(429, headers=headers).header("Retry-After") == "12"
        assert _classify(429, headers=headers).retry_after == 12

    def test_absent(self):
        assert header_value({}, "Retry-After") is None
