from pagekit.core.settings import ApplicationSettings


def test_environment_mapping_is_used_outside_app_context():
    settings = ApplicationSettings(
        {
            "TRUST_FORWARDED_PROTO": "yes",
            "CSRF_TRUSTED_ORIGINS": "https://a.example, ,https://b.example",
            "TOKEN_NAME_FIELD": "csrf_name",
        }
    )

    assert settings.trust_forwarded_proto is True
    assert settings.csrf_trusted_origins == ("https://a.example", "https://b.example")
    assert settings.token_name_field == "csrf_name"


def test_defaults_apply_when_unset():
    settings = ApplicationSettings({})

    assert settings.trust_forwarded_proto is False
    assert settings.csrf_trusted_origins == ()
    assert settings.token_value_field == "token_value"
    assert settings.safe_page == "/"
    assert settings.login_url == "/login"
    assert settings.force_request_scheme is None


def test_app_config_takes_precedence(app):
    settings = ApplicationSettings({"SAFE_PAGE": "/from-env"})
    app.config["SAFE_PAGE"] = "/from-config"

    with app.app_context():
        assert settings.safe_page == "/from-config"


def test_database_uri_defaults_to_in_memory_sqlite():
    assert ApplicationSettings({}).database_uri == "sqlite://"
    assert ApplicationSettings({"DATABASE_URI": "sqlite:///app.db"}).database_uri == "sqlite:///app.db"
