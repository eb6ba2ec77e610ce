"""Helpers for Flask page and Ajax views.

``create_app`` wires configuration, logging and error handling into a Flask
application; the helpers themselves live in :mod:`pagekit.security`,
:mod:`pagekit.ajax`, :mod:`pagekit.sanitize`, :mod:`pagekit.cookies`,
:mod:`pagekit.auth` and :mod:`pagekit.core`.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask

__version__ = "0.1.0"


def create_app(
    config_object: Any = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Flask:
    from pagekit.config import Config
    from pagekit.core.logging_config import configure_app_logging
    from pagekit.error_handlers import register_error_handlers

    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    if overrides:
        app.config.update(overrides)

    configure_app_logging(app)
    register_error_handlers(app)

    app.logger.debug(
        "pagekit application created",
        extra={"event": "app.created", "testing": app.testing},
    )
    return app


__all__ = ["__version__", "create_app"]
