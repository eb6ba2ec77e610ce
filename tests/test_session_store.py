from flask import session

from pagekit.security.session_store import SessionStore, current_store


def test_factory_backing_is_resolved_once():
    calls = []

    def factory():
        calls.append(1)
        return {}

    store = SessionStore(factory)
    assert calls == []

    store.set("a", 1)
    store.get("a")
    store.delete("a")

    assert calls == [1]


def test_basic_operations():
    backing = {}
    store = SessionStore(backing)

    assert store.get("missing") is None
    assert store.get("missing", 5) == 5
    assert store.contains("missing") is False
    assert store.delete("missing") is False

    store.set("key", "value")
    assert backing == {"key": "value"}
    assert store.contains("key") is True

    assert store.delete("key") is True
    assert backing == {}


def test_contains_distinguishes_none_values():
    store = SessionStore({"empty": None})

    assert store.contains("empty") is True


def test_now_truncates_clock_to_seconds():
    store = SessionStore({}, clock=lambda: 1234.9)

    assert store.now() == 1234


def test_default_backing_is_flask_session(app):
    with app.test_request_context():
        store = current_store()
        store.set("greeting", "hello")

        assert session["greeting"] == "hello"
        assert session.modified is True

        assert store.delete("greeting") is True
        assert "greeting" not in session
