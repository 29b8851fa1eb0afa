"""
Tests for ServiceResult and the response helpers built on it.
"""

import pytest
from django.db import DatabaseError
from rest_framework import serializers, status

from core.services import BaseService, ServiceResult
from core.views import invalid_request_response, result_response, status_for_error


class TestServiceResult:
    def test_success_is_truthy(self):
        result = ServiceResult.success({"id": 1}, "Créé.")

        assert result
        assert result.to_response() == {"success": True, "data": {"id": 1}, "message": "Créé."}

    def test_failure_is_falsy(self):
        result = ServiceResult.failure(
            "Données invalides.", error_code="VALIDATION_ERROR", errors={"name": ["Requis."]}
        )

        assert not result
        assert result.to_response() == {
            "success": False,
            "error": "Données invalides.",
            "error_code": "VALIDATION_ERROR",
            "errors": {"name": ["Requis."]},
        }

    def test_to_response_prefers_given_data(self):
        result = ServiceResult.success(object())

        assert result.to_response({"serialized": True})["data"] == {"serialized": True}


class TestValidateRequired:
    def test_all_present(self):
        assert BaseService.validate_required(name="Famille", members=[]) is None

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        result = BaseService.validate_required(name=value)

        assert result.error_code == "VALIDATION_ERROR"
        assert list(result.errors) == ["name"]


class TestHandleException:
    def test_returns_generic_french_error(self):
        result = BaseService.handle_exception(DatabaseError("disk I/O error"), "rename")

        assert not result
        assert result.error == "Une erreur interne est survenue."
        assert result.error_code == "INTERNAL_ERROR"
        assert "disk" not in result.error

    def test_logs_the_exception(self, caplog):
        with caplog.at_level("ERROR"):
            BaseService.handle_exception(DatabaseError("disk I/O error"), "rename")

        assert "rename: disk I/O error" in caplog.text


class TestStatusForError:
    @pytest.mark.parametrize(
        "error_code,expected",
        [
            ("GROUP_NOT_FOUND", status.HTTP_404_NOT_FOUND),
            ("USER_NOT_FOUND", status.HTTP_404_NOT_FOUND),
            ("NOT_PARTICIPANT", status.HTTP_403_FORBIDDEN),
            ("LOCKED", status.HTTP_403_FORBIDDEN),
            ("VALIDATION_ERROR", status.HTTP_400_BAD_REQUEST),
            ("ALREADY_FRIENDS", status.HTTP_400_BAD_REQUEST),
            (None, status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_mapping(self, error_code, expected):
        assert status_for_error(error_code) == expected


class TestResultResponse:
    def test_success_status(self):
        response = result_response(
            ServiceResult.success({"id": 1}), success_status=status.HTTP_201_CREATED
        )

        assert response.status_code == 201
        assert response.data["data"] == {"id": 1}

    def test_failure_status(self):
        response = result_response(
            ServiceResult.failure("Message non trouvé.", error_code="MESSAGE_NOT_FOUND")
        )

        assert response.status_code == 404
        assert response.data["error_code"] == "MESSAGE_NOT_FOUND"

    def test_invalid_request(self):
        class NameSerializer(serializers.Serializer):
            name = serializers.CharField()

        serializer = NameSerializer(data={})
        serializer.is_valid()

        response = invalid_request_response(serializer)

        assert response.status_code == 400
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "name" in response.data["errors"]
