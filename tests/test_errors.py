"""
Tests for JSON error rendering and the process fault boundary
"""

import sys
import threading

import pytest

from storefront.errors import ApiError, Conflict, ValidationError, install_fault_boundary


class TestErrorHandlers:

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.get_json()["status"] == "fail"

    def test_method_not_allowed(self, client):
        response = client.patch("/api/product")

        assert response.status_code == 405

    def test_unexpected_error_is_internal(self, app, client):
        @app.route("/boom")
        def boom():
            raise RuntimeError("database exploded")

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.get_json() == {"status": "error", "message": "Internal Server Error"}

    def test_validation_error_body(self):
        error = ValidationError("Bad input", errors={"title": ["required"]})

        assert error.status_code == 400
        assert error.to_dict() == {"status": "fail", "message": "Bad input", "errors": {"title": ["required"]}}

    def test_default_messages(self):
        assert str(Conflict()) == Conflict.default_message
        assert ApiError().status_code == 500


class TestFaultBoundary:

    @pytest.fixture
    def exits(self, monkeypatch):
        codes = []
        monkeypatch.setattr("storefront.errors.os._exit", codes.append)
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)
        monkeypatch.setattr(threading, "excepthook", threading.excepthook)
        return codes

    def test_uncaught_exception_logs_and_exits(self, exits, caplog):
        hook = install_fault_boundary()

        try:
            raise KeyError("lost")
        except KeyError:
            hook(*sys.exc_info())

        assert exits == [1]
        assert "UNCAUGHT EXCEPTION" in caplog.text
        assert sys.excepthook is hook

    def test_thread_exception_exits(self, exits):
        install_fault_boundary()

        worker = threading.Thread(target=lambda: 1 / 0)
        worker.start()
        worker.join()

        assert exits == [1]
