import pytest
from flask import request

from pagekit.security.origin import is_same_origin, request_origin, server_origin


def _same_origin(app, base_url, headers=None):
    with app.test_request_context("/ajax", base_url=base_url, headers=headers or {}):
        return is_same_origin(request)


def test_missing_origin_evidence_is_rejected(app):
    assert _same_origin(app, "https://example.com") is False


def test_referer_from_same_host_over_tls_is_accepted(app):
    headers = {"Referer": "https://example.com/page"}

    assert _same_origin(app, "https://example.com", headers) is True


def test_referer_from_other_host_is_rejected(app):
    headers = {"Referer": "https://example.com/page"}

    assert _same_origin(app, "https://evil.com", headers) is False


def test_referer_with_scheme_downgrade_is_rejected(app):
    headers = {"Referer": "http://example.com/page"}

    assert _same_origin(app, "https://example.com", headers) is False


def test_origin_header_takes_precedence_over_referer(app):
    headers = {"Origin": "https://evil.com", "Referer": "https://example.com/page"}

    assert _same_origin(app, "https://example.com", headers) is False


def test_null_origin_falls_back_to_referer(app):
    headers = {"Origin": "null", "Referer": "https://example.com/form"}

    assert _same_origin(app, "https://example.com", headers) is True


def test_non_default_port_must_match(app):
    assert _same_origin(app, "http://localhost:5000", {"Origin": "http://localhost:5000"}) is True
    assert _same_origin(app, "http://localhost:5000", {"Origin": "http://localhost:5001"}) is False


def test_trusted_origins_are_accepted(app):
    app.config["CSRF_TRUSTED_ORIGINS"] = "https://static.example.com, https://cdn.example.com"
    headers = {"Origin": "https://cdn.example.com"}

    assert _same_origin(app, "https://example.com", headers) is True


@pytest.mark.parametrize("referer", ["not a url", "//example.com/page", "ftp:///nohost"])
def test_unparseable_referer_is_rejected(app, referer):
    assert _same_origin(app, "https://example.com", {"Referer": referer}) is False


def test_diagnostic_helpers(app):
    with app.test_request_context(
        "/ajax",
        base_url="https://example.com",
        headers={"Referer": "https://Example.com:443/x"},
    ):
        assert request_origin() == "https://example.com"
        assert server_origin() == "https://example.com"
