from flask import Response

from pagekit.cookies import clear_cookie, cookie_options, set_cookie


def _set_cookie_headers(response):
    return response.headers.getlist("Set-Cookie")


def test_cookie_is_secure_over_https(app):
    response = Response()
    with app.test_request_context(base_url="https://example.com"):
        set_cookie(response, "prefs", "dark", max_age=60)

    header = _set_cookie_headers(response)[0]
    assert header.startswith("prefs=dark")
    assert "Secure" in header
    assert "HttpOnly" in header
    assert "SameSite=Lax" in header
    assert "Max-Age=60" in header
    assert "Path=/" in header


def test_cookie_is_not_secure_over_plain_http(app):
    response = Response()
    with app.test_request_context(base_url="http://example.com"):
        set_cookie(response, "prefs", "dark", httponly=False)

    header = _set_cookie_headers(response)[0]
    assert "Secure" not in header
    assert "HttpOnly" not in header


def test_configured_secure_is_downgraded_for_local_http(app):
    app.config["SESSION_COOKIE_SECURE"] = True
    with app.test_request_context(base_url="http://localhost:5000"):
        set_options, delete_options = cookie_options()

    assert set_options["secure"] is False
    assert delete_options["secure"] is False


def test_configured_secure_is_kept_for_remote_http(app):
    app.config.update(SESSION_COOKIE_SECURE=True, TESTING=False)
    with app.test_request_context(base_url="http://example.com"):
        set_options, _ = cookie_options()

    assert set_options["secure"] is True


def test_domain_is_applied_when_configured(app):
    app.config["SESSION_COOKIE_DOMAIN"] = "example.com"
    with app.test_request_context(base_url="https://www.example.com"):
        set_options, delete_options = cookie_options()

    assert set_options["domain"] == "example.com"
    assert delete_options["domain"] == "example.com"


def test_clear_cookie_expires_it(app):
    response = Response()
    with app.test_request_context(base_url="https://example.com"):
        clear_cookie(response, "prefs")

    header = _set_cookie_headers(response)[0]
    assert header.startswith("prefs=;")
    assert "Max-Age=0" in header
