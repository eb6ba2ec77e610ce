import json

import pytest
from werkzeug.exceptions import BadRequest


@pytest.fixture
def failing_app(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    @app.get("/bad")
    def bad():
        raise BadRequest()

    return app


def test_unhandled_exception_writes_report_and_redirects(failing_app, tmp_path):
    client = failing_app.test_client()

    response = client.get("/boom")

    assert response.status_code == 302
    assert response.headers["Location"] == "/"
    reports = list((tmp_path / "reports").glob("*.json"))
    assert len(reports) == 1
    assert json.loads(reports[0].read_text(encoding="utf-8"))["message"] == "boom"


def test_repeated_failure_is_deduplicated(failing_app, tmp_path):
    client = failing_app.test_client()

    client.get("/boom")
    client.get("/boom")

    assert len(list((tmp_path / "reports").glob("*.json"))) == 1


def test_ajax_exception_returns_generic_json(failing_app):
    client = failing_app.test_client()

    response = client.get("/boom", headers={"X-Requested-With": "XMLHttpRequest"})

    assert response.status_code == 500
    assert response.get_json() == {
        "status": "error",
        "code": 500,
        "message": "Internal Server Error",
    }


def test_http_errors_keep_their_status(failing_app):
    client = failing_app.test_client()

    assert client.get("/bad").status_code == 400
    assert client.get("/missing").status_code == 404


def test_ajax_http_error_is_json(failing_app):
    client = failing_app.test_client()

    response = client.get("/bad", headers={"Accept": "application/json"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Bad Request"
