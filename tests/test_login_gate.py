import pytest

from pagekit.auth import is_logged_in, log_in, log_out, login_required, require_login
from pagekit.security.session_store import SessionStore


def test_log_in_and_out_with_explicit_store(app):
    store = SessionStore({})
    with app.app_context():
        assert is_logged_in(store) is False

        log_in(42, store)
        assert is_logged_in(store) is True
        assert store.get("user_id") == 42

        assert log_out(store) is True
        assert is_logged_in(store) is False
        assert log_out(store) is False


def test_log_in_rejects_missing_identity(app):
    with app.app_context(), pytest.raises(ValueError):
        log_in(None, SessionStore({}))


def test_require_login_redirects_anonymous(app):
    with app.test_request_context():
        response = require_login(store=SessionStore({}))
        assert response.status_code == 302
        assert response.headers["Location"] == "/login"

        custom = require_login("/signin", store=SessionStore({}))
        assert custom.headers["Location"] == "/signin"

        assert require_login(store=SessionStore({"user_id": 1})) is None


def test_session_key_is_configurable(app):
    app.config["LOGIN_SESSION_KEY"] = "account"
    store = SessionStore({})
    with app.app_context():
        log_in("ana", store)

    assert store.get("account") == "ana"


def test_login_required_decorator(app, client):
    @app.get("/private")
    @login_required
    def private():
        return "secret"

    @app.post("/login")
    def do_login():
        log_in(7)
        return "ok"

    anonymous = client.get("/private")
    assert anonymous.status_code == 302
    assert anonymous.headers["Location"] == "/login"

    client.post("/login")
    assert client.get("/private").get_data(as_text=True) == "secret"
